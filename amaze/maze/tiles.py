# Cell value constants shared by the generator, visibility and movement code.
#
# WALL does double duty: during generation it is the boundary between two
# flood-fill regions, afterwards the player may stand on it and it behaves as
# a corridor tile for visibility and door crossing.
FLOOR = 0
WALL = 1
CORRIDOR = WALL
DOOR = 2

# First region tag handed out to flood-fill seeds (transient, generation only)
FIRST_REGION = 2

CELL_VALUES = (FLOOR, WALL, DOOR)


def value_to_type(value: int) -> str:
    if value == FLOOR:
        return "room"
    if value == WALL:
        return "corridor"
    if value == DOOR:
        return "door"
    return "unknown"


__all__ = ["FLOOR", "WALL", "CORRIDOR", "DOOR", "FIRST_REGION", "CELL_VALUES", "value_to_type"]
