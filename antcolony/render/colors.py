"""
antcolony module: render/colors.py

Central color palette.
"""

BG = (2, 8, 23)
GROUND = (15, 23, 42)

NEST = (251, 191, 36)
NEST_RIM = (245, 158, 11)

FOOD = (34, 197, 94)
FOOD_RIM = (21, 128, 61)

ANT = (241, 245, 249)
ANT_CARRYING = (249, 115, 22)
ANT_FORCED = (239, 68, 68)

HOME_TRAIL = (96, 165, 250)
FOOD_TRAIL = (16, 185, 129)
NEST_SIGNAL = (253, 224, 71)

HUD = (235, 235, 235)
