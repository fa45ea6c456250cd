"""Simplified world coastline, as closed ``(longitude, latitude)`` polylines.

The outlines are coarse on purpose: at braille resolution a full-screen
terminal has roughly 400x200 addressable dots, so a few dozen vertices per
continent is enough to make the map recognisable.
"""

from __future__ import annotations

NORTH_AMERICA = [
    (-168, 66), (-156, 71), (-141, 70), (-125, 70), (-108, 68), (-95, 68),
    (-88, 64), (-94, 59), (-92, 57), (-82, 55), (-79, 52), (-78, 58),
    (-77, 62), (-70, 60), (-64, 60), (-61, 56), (-56, 52), (-59, 48),
    (-65, 45), (-70, 43), (-70, 41), (-74, 40), (-76, 35), (-81, 31),
    (-80, 26), (-81, 25), (-83, 29), (-89, 30), (-94, 29), (-97, 26),
    (-97, 22), (-94, 18), (-91, 19), (-87, 21), (-88, 16), (-83, 15),
    (-83, 10), (-79, 9), (-77, 8), (-83, 8), (-86, 11), (-92, 14),
    (-96, 16), (-105, 20), (-109, 25), (-113, 31), (-117, 32.5),
    (-120, 34.5), (-122.5, 37.5), (-124, 40), (-124, 46), (-123, 49),
    (-127, 51), (-130, 54), (-134, 57), (-137, 59), (-146, 61), (-152, 59),
    (-157, 57), (-162, 55), (-158, 58), (-162, 60), (-165, 62), (-168, 66),
]

SOUTH_AMERICA = [
    (-77, 8), (-72, 12), (-64, 10.5), (-60, 8.5), (-52, 5), (-50, 0),
    (-44, -2), (-35, -5), (-35, -9), (-39, -14), (-41, -22), (-48, -26),
    (-53, -34), (-58, -35), (-57, -38), (-62, -39), (-65, -42), (-65, -46),
    (-69, -51), (-68, -55), (-72, -54), (-75, -50), (-74, -43), (-73, -37),
    (-71, -30), (-70, -20), (-76, -14), (-80, -6), (-81, -3), (-80, 0),
    (-79, 2), (-78, 7), (-77, 8),
]

AFRICA = [
    (-6, 36), (10, 37), (11, 33), (20, 31), (25, 32), (32, 31), (34, 28),
    (38, 21), (43, 12), (51, 12), (51, 10), (44, 1), (40, -3), (39, -8),
    (40, -15), (35, -24), (32, -29), (27, -34), (20, -35), (18, -32),
    (15, -27), (12, -17), (13, -11), (9, -1), (10, 4), (6, 4), (2, 6),
    (-4, 5), (-8, 4.5), (-13, 8), (-17, 14), (-17, 21), (-13, 27),
    (-10, 30), (-8, 34), (-6, 36),
]

EURASIA = [
    (-9, 43), (-9, 39), (-6, 37), (-2, 37), (3, 43), (8, 44), (12, 44),
    (16, 41), (18, 40), (20, 40), (23, 38), (26, 41), (29, 41), (36, 37),
    (35, 33), (34, 28), (39, 21), (43, 13), (52, 16), (57, 19), (59, 23),
    (56, 26), (51, 24), (48, 29), (50, 30), (57, 26), (62, 25), (67, 24),
    (70, 21), (73, 17), (77, 8), (80, 10), (80, 16), (87, 21), (92, 22),
    (94, 16), (98, 16), (98, 8), (101, 3), (104, 1.3), (103, 5), (101, 7),
    (100, 13), (105, 9), (109, 12), (108, 16), (106, 20), (110, 21),
    (116, 23), (120, 27), (122, 31), (119, 35), (122, 37), (121, 40),
    (118, 39), (125, 40), (129, 35), (129, 40), (131, 43), (140, 48),
    (141, 52), (137, 54), (143, 59), (155, 59), (156, 51), (162, 56),
    (163, 60), (170, 60), (180, 65), (180, 69), (170, 70), (160, 70),
    (150, 71), (140, 72), (130, 71), (113, 73), (105, 78), (95, 76),
    (80, 73), (70, 73), (68, 68), (60, 69), (50, 68), (44, 68), (40, 66),
    (33, 69), (25, 71), (15, 69), (10, 63), (5, 62), (5, 58), (8, 58),
    (11, 59), (12, 56), (10, 54), (8, 54), (5, 53), (2, 51), (-2, 49),
    (-5, 48), (-1, 46), (-2, 43.5), (-9, 43),
]

AUSTRALIA = [
    (114, -22), (114, -26), (115, -34), (118, -35), (124, -34), (129, -32),
    (135, -34), (138, -35), (140, -38), (146, -39), (150, -37), (153, -32),
    (153, -25), (150, -22), (146, -19), (145, -15), (142, -11), (141, -17),
    (136, -15), (137, -12), (132, -11), (129, -15), (126, -14), (122, -18),
    (114, -22),
]

GREENLAND = [
    (-73, 78), (-60, 82), (-40, 83), (-20, 82), (-18, 77), (-22, 70),
    (-32, 68), (-42, 61), (-48, 61), (-53, 67), (-56, 73), (-66, 76),
    (-73, 78),
]

GREAT_BRITAIN = [
    (-5, 50), (1, 51), (2, 53), (-1, 55), (-2, 57), (-4, 58.5), (-6, 58),
    (-6, 56), (-5, 55), (-3, 54), (-4, 53), (-5, 52), (-5, 50),
]

JAPAN = [
    (130, 31), (132, 34), (135, 35), (140, 35), (141, 38), (142, 41),
    (141, 45), (145, 44), (143, 42), (140, 40), (139, 38), (137, 37),
    (133, 35), (130, 33), (130, 31),
]

MADAGASCAR = [(49, -12), (50, -16), (48, -24), (45, -25), (43, -21), (44, -16), (49, -12)]

NEW_ZEALAND = [
    (172, -34), (178, -38), (175, -41), (172, -41), (168, -46), (167, -45),
    (171, -42), (174, -39), (172, -34),
]

BORNEO = [(109, 2), (113, 3), (117, 7), (119, 5), (118, 1), (116, -4), (111, -3), (109, -1), (109, 2)]

SUMATRA = [(95, 5), (98, 4), (104, -2), (106, -6), (102, -4), (98, 0), (95, 5)]

# Open coastline; the continent runs off both edges of the map
ANTARCTICA = [
    (-180, -78), (-150, -76), (-120, -73), (-90, -72), (-60, -64), (-30, -74),
    (0, -70), (30, -69), (60, -67), (90, -66), (120, -66), (150, -68),
    (180, -78),
]

WORLD_OUTLINES: list[list[tuple[float, float]]] = [
    NORTH_AMERICA,
    SOUTH_AMERICA,
    AFRICA,
    EURASIA,
    AUSTRALIA,
    GREENLAND,
    GREAT_BRITAIN,
    JAPAN,
    MADAGASCAR,
    NEW_ZEALAND,
    BORNEO,
    SUMATRA,
    ANTARCTICA,
]
