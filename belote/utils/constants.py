"""Game constants for Belote."""

# Suits (compact encoding)
CLUBS = "c"
DIAMONDS = "d"
HEARTS = "h"
SPADES = "s"
SUITS = [CLUBS, DIAMONDS, HEARTS, SPADES]

# Suit display symbols
SUIT_SYMBOLS = {
    CLUBS: "♣",
    DIAMONDS: "♦",
    HEARTS: "♥",
    SPADES: "♠",
}

SUIT_NAMES = {
    CLUBS: "clubs",
    DIAMONDS: "diamonds",
    HEARTS: "hearts",
    SPADES: "spades",
}

# Ranks
SEVEN = 7
EIGHT = 8
NINE = 9
TEN = 10
JACK = 11
QUEEN = 12
KING = 13
ACE = 14
RANKS = [SEVEN, EIGHT, NINE, TEN, JACK, QUEEN, KING, ACE]

# Rank display names
RANK_NAMES = {
    7: "7",
    8: "8",
    9: "9",
    10: "10",
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
}

# Point and order tables, keyed by rank.
# Orders are only ever compared within the same trump status.
NORMAL_POINTS = {SEVEN: 0, EIGHT: 0, NINE: 0, TEN: 10, JACK: 2, QUEEN: 3, KING: 4, ACE: 11}
TRUMP_POINTS = {SEVEN: 0, EIGHT: 0, NINE: 14, TEN: 10, JACK: 20, QUEEN: 3, KING: 4, ACE: 11}
NORMAL_ORDER = {SEVEN: 1, EIGHT: 2, NINE: 3, TEN: 6, JACK: 4, QUEEN: 5, KING: 7, ACE: 8}
TRUMP_ORDER = {SEVEN: 1, EIGHT: 2, NINE: 7, TEN: 5, JACK: 8, QUEEN: 4, KING: 6, ACE: 7}

# Seats
NORTH = "N"
EAST = "E"
SOUTH = "S"
WEST = "W"
# Clockwise rotation used for play, deal and dealer rotation
POSITIONS = [SOUTH, WEST, NORTH, EAST]

POSITION_NAMES = {
    NORTH: "North",
    EAST: "East",
    SOUTH: "South",
    WEST: "West",
}

# Teams
TEAM_NS = "NS"
TEAM_EW = "EW"
TEAMS = [TEAM_NS, TEAM_EW]

# Game parameters
TOTAL_CARDS = 32
CARDS_PER_PLAYER = 8
NUM_PLAYERS = 4
TRICKS_PER_ROUND = 8
DEAL_PATTERN = [3, 2, 3]
TOTAL_CARD_POINTS = 152
LAST_TRICK_BONUS = 10
BELOTE_BONUS = 20
DEFAULT_TARGET_SCORE = 1000

# Announcements
ANNOUNCE_BELOTE = "belote"
ANNOUNCE_REBELOTE = "rebelote"

# Game phases
PHASE_DEALING = "DEALING"
PHASE_PLAY = "PLAY"
PHASE_ROUND_END = "ROUND_END"
PHASE_FINISHED = "FINISHED"

# AI levels (consumed by the presentation layer)
AI_APPRENTI = "APPRENTI"
AI_CONFIRME = "CONFIRME"
AI_EXPERT = "EXPERT"
AI_CHAMPION = "CHAMPION"
AI_LEVELS = [AI_APPRENTI, AI_CONFIRME, AI_EXPERT, AI_CHAMPION]
DEFAULT_AI_LEVEL = AI_CONFIRME
