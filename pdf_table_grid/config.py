"""
Shared configuration and constants.
"""

import dataclasses


# Page presets in millimetres: (width, height)
PAGE_SIZES = {
	"A1": (594.0, 841.0),
	"A2": (420.0, 594.0),
	"A3": (297.0, 420.0),
	"A4": (210.0, 297.0),
	"A5": (148.0, 210.0),
}
DEFAULT_PAGE = "A4"
DEFAULT_MARGIN = 10.0

DEFAULT_MAX_COLUMNS = 12
DEFAULT_ROW_HEIGHT = 7.5
DEFAULT_BREAK_MARGIN = 7.5
DEFAULT_COLUMN_WEIGHTS = (6, 2, 2, 2)
DEFAULT_COLUMN_WEIGHT = 1

BORDER_PADDING_FACTOR = 0.5
ANCHOR_PADDING_FACTOR = 0.25
CELL_PADDING = 1.0

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_SIZE = 12.0

DEFAULT_BARCODE_HEIGHT = 50
BARCODE_MODULE_WIDTH = 1
BARCODE_QUIET_ZONE = 0
BARCODE_MODULE_MM = 0.33
DEFAULT_BARCODE_PRINT_HEIGHT = 15.0
BARCODE_GAP = 5.0


@dataclasses.dataclass
class RunConfig:
	page: str
	column_weights: tuple[int, ...]
	max_columns: int
	row_height: float
	borders: bool
	font_size: float
	break_margin: float
	barcode: str | None
	barcode_height: float
	manifest_path: str | None


#============================================
def parse_column_weights(value: str) -> tuple[int, ...]:
	"""
	Parse a comma separated list of column weights.

	Args:
		value: String like "6,2,2,2".

	Returns:
		Tuple of integer weights.
	"""
	parts = [part.strip() for part in value.split(",")]
	return tuple(int(part) for part in parts if part)
