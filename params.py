from typing import List, Dict, Tuple


# Chart container defaults (pixels)
CONTAINER_WIDTH = 1200
CONTAINER_HEIGHT = 700
MARGIN: Dict[str, int] = {"top": 70, "right": 50, "bottom": 100, "left": 50}
TOOLTIP_PADDING = 15

# Band scale padding between bars (fraction of the step)
BAND_PADDING_INNER = 0.2

# Axis setup
X_AXIS_TITLE = "State"
Y_AXIS_TITLE = "Percent Drinking"
Y_TICK_COUNT = 30
TICK_FORMAT = "{:.1f}"

# Transition timings (milliseconds)
ENTER_DURATION = 500
ENTER_STAGGER = 5
UPDATE_DURATION = 1000
UPDATE_START_OPACITY = 0.5
X_AXIS_DURATION = 1000

# Filters applied when the page first loads
DEFAULT_FILTERS: Dict[str, str] = {"sex": "female", "type": "any"}
SEXES: List[str] = ["female", "male"]

# Bar colors keyed by percent drinking.
# Sorted (lower_bound, color) pairs; each bucket runs up to the next lower bound.
# The last bucket is closed at BUCKET_UPPER_BOUND.
BUCKET_COLORS: List[Tuple[float, str]] = [
    (5, "#247881"),
    (12, "#2B9699"),
    (18, "#18AFAB"),
    (20, "#2EA29F"),
    (25, "#36BBB7"),
    (30, "#33C5C1"),
    (35, "#3CCECA"),
    (40, "#2ABEC3"),
    (47, "#2BCACF"),
    (53, "#32D0D5"),
    (60, "#2FDDE2"),
    (66, "#30E7EC"),
    (72, "#38F5FB"),
]
BUCKET_UPPER_BOUND = 75

# Color for percents outside the bucket table (below 5, above 75)
FALLBACK_COLOR = "#9E9E9E"

# Tooltip rows: (record field, label)
TOOLTIP_FIELDS: List[Tuple[str, str]] = [
    ("state", "State"),
    ("sex", "Gender"),
    ("percent", "Percent Drinking"),
    ("type", "Type"),
]

# Label shown in place of the bars when the filtered data set is empty
NO_DATA_TEXT = "No data for this selection"
