"""Input event codes, decoded event types and the physical button decoder."""