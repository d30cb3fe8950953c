"""
Cell placement: text anchors and border rectangles.
"""

# Standard Library
import typing

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.config
import pdf_table_grid.errors
import pdf_table_grid.geometry
import pdf_table_grid.grid


PageGeometry = ptg.geometry.PageGeometry
GridModel = ptg.grid.GridModel
IndexOutOfRange = ptg.errors.IndexOutOfRange

BORDER_PADDING_FACTOR = ptg.config.BORDER_PADDING_FACTOR
ANCHOR_PADDING_FACTOR = ptg.config.ANCHOR_PADDING_FACTOR
CELL_PADDING = ptg.config.CELL_PADDING


class Point(typing.NamedTuple):
	"""Page coordinate, y measured up from the page bottom."""
	x: float
	y: float


#============================================
def check_cell_index(grid: GridModel, column_index: int, row_num: int) -> None:
	"""
	Reject row or column indexes outside the table.

	Args:
		grid: Table grid.
		column_index: Column index.
		row_num: Row index.
	"""
	if row_num < 0 or row_num >= len(grid.rows):
		raise IndexOutOfRange(
			f"Row index {row_num} must be less than the {len(grid.rows)} rows in the table"
		)
	if column_index < 0 or column_index >= len(grid.columns):
		raise IndexOutOfRange(
			f"Column index {column_index} must be less than the {len(grid.columns)} columns"
		)


#============================================
def column_edges(geometry: PageGeometry, grid: GridModel, column_index: int) -> tuple[float, float]:
	"""
	Compute the left and right x of a weighted column.

	Args:
		geometry: Page geometry.
		grid: Table grid.
		column_index: Column index.

	Returns:
		Tuple of (left_x, right_x).
	"""
	column_size = geometry.inner_width / grid.max_columns
	units_before = sum(column.width for column in grid.columns[:column_index])
	units_through = units_before + grid.columns[column_index].width
	left_x = geometry.margin_width + units_before * column_size
	right_x = geometry.margin_width + units_through * column_size
	return (left_x, right_x)


#============================================
def border_points(
	geometry: PageGeometry,
	grid: GridModel,
	column_index: int,
	row_num: int,
	position_y: float | None = None,
) -> list[Point]:
	"""
	Compute the closed rectangle around one cell.

	Args:
		geometry: Page geometry.
		grid: Table grid.
		column_index: Column index.
		row_num: Row index local to the current page.
		position_y: Table top for the current page, defaults to grid.position_y.

	Returns:
		Points in order top-left, top-right, bottom-right, bottom-left.
	"""
	check_cell_index(grid, column_index, row_num)
	if position_y is None:
		position_y = grid.position_y
	border_padding = grid.row_height * BORDER_PADDING_FACTOR
	top_y = position_y - border_padding - row_num * grid.row_height
	bottom_y = top_y - grid.row_height
	left_x, right_x = column_edges(geometry, grid, column_index)
	return [
		Point(left_x, top_y),
		Point(right_x, top_y),
		Point(right_x, bottom_y),
		Point(left_x, bottom_y),
	]


#============================================
def cell_anchor(
	geometry: PageGeometry,
	grid: GridModel,
	column_index: int,
	row_num: int,
	position_y: float | None = None,
) -> Point:
	"""
	Compute the text anchor of one cell.

	With borders on, the anchor is pulled right by a quarter row height
	and down by CELL_PADDING so text clears the rectangle edges.

	Args:
		geometry: Page geometry.
		grid: Table grid.
		column_index: Column index.
		row_num: Row index local to the current page.
		position_y: Table top for the current page, defaults to grid.position_y.

	Returns:
		Anchor point.
	"""
	check_cell_index(grid, column_index, row_num)
	if position_y is None:
		position_y = grid.position_y
	if grid.borders:
		cell_padding = CELL_PADDING
		border_padding = grid.row_height * ANCHOR_PADDING_FACTOR
	else:
		cell_padding = 0.0
		border_padding = 0.0
	y = position_y - (row_num + 1) * grid.row_height - cell_padding
	left_x, _right_x = column_edges(geometry, grid, column_index)
	return Point(left_x + border_padding, y)
