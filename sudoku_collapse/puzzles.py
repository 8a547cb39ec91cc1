"""Named puzzles used by the CLI and the benchmark."""

from typing import Dict

# https://sudoku.com/easy/
EASY_PUZZLE = (
    "040602031"
    "000001609"
    "600540827"
    "002760080"
    "506000074"
    "087005062"
    "160080050"
    "820007090"
    "700006200"
)

EASY_SOLUTION = (
    "948672531"
    "275831649"
    "631549827"
    "492763185"
    "516928374"
    "387415962"
    "169284753"
    "823157496"
    "754396218"
)

CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

# Needs search; pure elimination stalls on it
HARD_PUZZLE = (
    "000000000"
    "000003085"
    "001020000"
    "000507000"
    "004000100"
    "090000000"
    "500009007"
    "070040000"
    "300000008"
)

PUZZLES: Dict[str, str] = {
    "easy": EASY_PUZZLE,
    "classic": CLASSIC_PUZZLE,
    "hard": HARD_PUZZLE,
}
