from enum import IntEnum

class ShapeCode(IntEnum):
    VALID = 0
    NDIM = 1        # wrong number of array dimensions
    ARITY = 2       # length disagrees with a fixed arity
    COLUMNS = 3     # table too narrow to split features / target
    ROWS = 4        # table has no rows
    TERM = 5        # polynomial term a table cannot represent
