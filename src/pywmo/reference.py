"""Static reference tables."""

# Hours to add to a local time to get to UTC
offsets = {
    "GMT": 0,
    "UTC": 0,
    "CVT": 1,
    "CHDT": -9,
    "PWT": -9,
    "CHST": -10,
    "CHUT": -10,
    "LST": -10,
    "KOST": -11,
    "PONT": -11,
    "MHT": -12,
    "ADT": 3,
    "VDT": 3,
    "VST": 4,
    "EDT": 4,
    "AST": 4,
    "CDT": 5,
    "EST": 5,
    "MDT": 6,
    "CST": 6,
    "PDT": 7,
    "MST": 7,
    "AKDT": 8,
    "PST": 8,
    "HDT": 9,
    "AKST": 9,
    "HST": 10,
    "SST": 11,
    "PLT": -5,
    "GSST": -4,
}

# RECCO radar capability indicator (the XXX in 9XXX9)
radar_capability = {
    "222": -1,
    "555": 0,
    "777": 1,
}

# Plan of the day storm classifications stripped from the storm name
storm_classifications = [
    "POTENTIAL TROPICAL CYCLONE",
    "TROPICAL DEPRESSION",
    "TROPICAL STORM",
    "HURRICANE",
]
