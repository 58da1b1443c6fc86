"""Domain constants for a Schwingfest.

Round counts, the result vocabulary, the line menus and the Kranz
percentages are fixed by the festival format and are not configurable.
"""

NORMAL = "normal"
ESAF = "esaf"

# festival type -> number of rounds (Gänge)
ROUND_COUNTS: dict[str, int] = {
    NORMAL: 6,
    ESAF: 8,
}

FESTIVAL_TYPES = tuple(ROUND_COUNTS)

# Result texts offered to the operator when entering a bout
RESULT_OPTIONS = ["10.00", "9.75", "9.00", "8.75", "8.50", "10.00 / 9.75", "9.00 / 8.75"]

# Number of simultaneous bouts (Plätze) the operator can choose from
BOUT_COUNT_CHOICES = (3, 4, 5, 6, 7)
DEFAULT_BOUT_COUNT = 4

# Line keys
AUSSTICH = "ausstich"
KRANZAUSSTICH = "kranzausstich"
SCHLUSSGANG = "schlussgang"
KRANZ = "kranz"
MIN_KRANZ = "min_kranz"
MAX_KRANZ = "max_kranz"

LINE_TITLES = {
    AUSSTICH: "Ausstichlinie",
    KRANZAUSSTICH: "Kranzausstichlinie",
    SCHLUSSGANG: "Schlussgangkandidaten",
    KRANZ: "Kranzlinie",
    MIN_KRANZ: "Min. Kränze",
    MAX_KRANZ: "Max. Kränze",
}

# Selectable values per configurable line, by festival type
LINE_MENUS: dict[str, dict[str, tuple[float, ...]]] = {
    NORMAL: {
        AUSSTICH: (36.00, 35.75, 35.50),
        KRANZ: (56.50, 56.25, 56.00),
    },
    ESAF: {
        AUSSTICH: (36.00, 35.75, 35.50),
        KRANZAUSSTICH: (54.50, 54.25),
        KRANZ: (75.00, 74.75, 74.50),
    },
}

LINE_DEFAULTS: dict[str, dict[str, float]] = {
    NORMAL: {AUSSTICH: 35.75, KRANZ: 56.50},
    ESAF: {AUSSTICH: 35.75, KRANZAUSSTICH: 54.25, KRANZ: 75.00},
}

# Share of the field that receives a Kranz (rounded up)
MIN_KRANZ_SHARE = 0.15
MAX_KRANZ_SHARE = 0.18

# Only competitors strictly above this total are Kranz candidates
KRANZ_CANDIDATE_THRESHOLD = {
    NORMAL: 55.75,
    ESAF: 74.25,
}

# Targets shown by the Kranzrechner
KRANZ_TARGETS = {
    NORMAL: (56.50, 56.25, 56.00),
    ESAF: (75.00, 74.75, 74.50),
}

# The official ESAF line, flagged with a star in the calculator
OFFICIAL_TARGETS = (74.75,)
