"""
Pagination of table rows across pages with a repeated header.

Planning is a fold over the row sequence: each step takes the
pagination state and returns the next state plus the placements for
that row. Dispatch to a rendering collaborator is a separate replay of
the finished plan.
"""

# Standard Library
import dataclasses

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.config
import pdf_table_grid.errors
import pdf_table_grid.geometry
import pdf_table_grid.grid
import pdf_table_grid.locator


PageGeometry = ptg.geometry.PageGeometry
GridModel = ptg.grid.GridModel
Point = ptg.locator.Point
GridValidationError = ptg.errors.GridValidationError

DEFAULT_BREAK_MARGIN = ptg.config.DEFAULT_BREAK_MARGIN
DEFAULT_FONT_SIZE = ptg.config.DEFAULT_FONT_SIZE

PAGE = "page"
BORDER = "border"
TEXT = "text"


@dataclasses.dataclass(frozen=True)
class PaginationState:
	cursor_y: float
	position_y: float
	pages_created: int = 0
	row_offset: int = 0
	header_pending: bool = True


@dataclasses.dataclass(frozen=True)
class Placement:
	kind: str
	page: int
	row_index: int = -1
	column_index: int = -1
	text: str = ""
	bold: bool = False
	anchor: Point | None = None
	points: tuple[Point, ...] = ()


@dataclasses.dataclass
class TablePlan:
	placements: list[Placement]
	final_state: PaginationState
	threshold_mismatch: bool

	@property
	def final_y(self) -> float:
		return self.final_state.cursor_y

	@property
	def pages_created(self) -> int:
		return self.final_state.pages_created

	def page_breaks(self) -> list[Placement]:
		return [placement for placement in self.placements if placement.kind == PAGE]


#============================================
def needs_page_break(geometry: PageGeometry, cursor_y: float, break_margin: float) -> bool:
	"""
	Check whether the cursor has run into the bottom margin band.
	"""
	return cursor_y <= geometry.margin_height + break_margin


#============================================
def row_slot(state: PaginationState, row_index: int) -> int:
	"""
	Compute the page-local slot of a data row.

	A header repeated after a page break takes slot 0 on that page, so
	data rows on repeat pages move down one slot.

	Args:
		state: Current pagination state.
		row_index: Global row index.

	Returns:
		Row-local index.
	"""
	header_slots = 1 if state.row_offset > 0 else 0
	return row_index + header_slots - state.row_offset


#============================================
def place_row_cells(
	geometry: PageGeometry,
	grid: GridModel,
	state: PaginationState,
	row_index: int,
	cells: list[str],
	slot: int,
	bold: bool,
) -> tuple[float, list[Placement]]:
	"""
	Place every cell of one row at a row-local slot.

	Args:
		geometry: Page geometry.
		grid: Table grid.
		state: Current pagination state.
		row_index: Global row index the cells belong to.
		cells: Cell text values.
		slot: Row-local index on the current page.
		bold: Whether the row is drawn in the header style.

	Returns:
		Tuple of (cursor_y after the row, placements).
	"""
	page = state.pages_created
	cursor_y = state.cursor_y
	placements: list[Placement] = []
	for column_index, cell in enumerate(cells):
		if grid.borders:
			points = ptg.locator.border_points(
				geometry, grid, column_index, slot, position_y=state.position_y,
			)
			placements.append(
				Placement(
					kind=BORDER,
					page=page,
					row_index=row_index,
					column_index=column_index,
					points=tuple(points),
				)
			)
		anchor = ptg.locator.cell_anchor(
			geometry, grid, column_index, slot, position_y=state.position_y,
		)
		placements.append(
			Placement(
				kind=TEXT,
				page=page,
				row_index=row_index,
				column_index=column_index,
				text=cell,
				bold=bold,
				anchor=anchor,
			)
		)
		cursor_y = anchor.y
	return (cursor_y, placements)


#============================================
def paginate_row(
	geometry: PageGeometry,
	grid: GridModel,
	state: PaginationState,
	row_index: int,
	break_margin: float = DEFAULT_BREAK_MARGIN,
) -> tuple[PaginationState, list[Placement]]:
	"""
	Advance the pagination fold by one row.

	Args:
		geometry: Page geometry.
		grid: Table grid, row 0 is the header.
		state: State before this row.
		row_index: Global index of the row to place.
		break_margin: Space above the bottom margin that forces a break.

	Returns:
		Tuple of (state after this row, placements for this row).
	"""
	placements: list[Placement] = []
	if needs_page_break(geometry, state.cursor_y, break_margin):
		pages_created = state.pages_created + 1
		state = dataclasses.replace(
			state,
			pages_created=pages_created,
			row_offset=row_index,
			header_pending=True,
			position_y=geometry.height - geometry.margin_height,
		)
		placements.append(Placement(kind=PAGE, page=pages_created, row_index=row_index))

	if state.header_pending:
		cursor_y, header_placements = place_row_cells(
			geometry,
			grid,
			state,
			0,
			grid.header,
			row_index - state.row_offset,
			bold=True,
		)
		placements.extend(header_placements)
		state = dataclasses.replace(state, cursor_y=cursor_y, header_pending=False)
		if row_index == 0:
			return (state, placements)

	cursor_y, row_placements = place_row_cells(
		geometry,
		grid,
		state,
		row_index,
		grid.rows[row_index],
		row_slot(state, row_index),
		bold=False,
	)
	placements.extend(row_placements)
	state = dataclasses.replace(state, cursor_y=cursor_y)
	return (state, placements)


#============================================
def plan_table(
	geometry: PageGeometry,
	grid: GridModel,
	start_y: float,
	break_margin: float = DEFAULT_BREAK_MARGIN,
) -> TablePlan:
	"""
	Plan the placement of every row of a table.

	Args:
		geometry: Page geometry.
		grid: Table grid with at least a header row.
		start_y: Cursor y when the table starts.
		break_margin: Space above the bottom margin that forces a break.

	Returns:
		TablePlan with placements in draw order.
	"""
	if not grid.rows:
		raise GridValidationError("Cannot lay out a table without a header row")
	state = PaginationState(cursor_y=start_y, position_y=grid.position_y)
	placements: list[Placement] = []
	for row_index in range(len(grid.rows)):
		state, row_placements = paginate_row(geometry, grid, state, row_index, break_margin)
		placements.extend(row_placements)
	return TablePlan(
		placements=placements,
		final_state=state,
		threshold_mismatch=grid.row_height != break_margin,
	)


#============================================
def dispatch_plan(
	renderer,
	layer,
	geometry: PageGeometry,
	plan: TablePlan,
	regular_font,
	bold_font,
	font_size: float = DEFAULT_FONT_SIZE,
):
	"""
	Replay a plan against a rendering collaborator.

	Args:
		renderer: Object with create_page, draw_text and draw_polygon.
		layer: Layer handle to draw on until the first page break.
		geometry: Page geometry used for new pages.
		plan: Plan from plan_table.
		regular_font: Font reference for data rows.
		bold_font: Font reference for header rows.
		font_size: Text size.

	Returns:
		Last active layer handle.
	"""
	for placement in plan.placements:
		if placement.kind == PAGE:
			_page, layer = renderer.create_page(
				geometry.width, geometry.height, str(placement.page),
			)
		elif placement.kind == BORDER:
			renderer.draw_polygon(
				layer,
				list(placement.points),
				closed=True,
				filled=False,
				stroked=True,
			)
		elif placement.kind == TEXT:
			font_ref = bold_font if placement.bold else regular_font
			renderer.draw_text(
				layer,
				placement.text,
				font_size,
				placement.anchor.x,
				placement.anchor.y,
				font_ref,
			)
	return layer


#============================================
def layout_table(
	renderer,
	layer,
	geometry: PageGeometry,
	grid: GridModel,
	start_y: float,
	regular_font,
	bold_font,
	font_size: float = DEFAULT_FONT_SIZE,
	break_margin: float = DEFAULT_BREAK_MARGIN,
) -> tuple[float, object]:
	"""
	Lay out a table and draw it through a rendering collaborator.

	Args:
		renderer: Rendering collaborator.
		layer: Layer handle of the page the table starts on.
		geometry: Page geometry.
		grid: Table grid, row 0 is the header.
		start_y: Cursor y when the table starts.
		regular_font: Font reference for data rows.
		bold_font: Font reference for header rows.
		font_size: Text size.
		break_margin: Space above the bottom margin that forces a break.

	Returns:
		Tuple of (final cursor y, last active layer handle).
	"""
	plan = plan_table(geometry, grid, start_y, break_margin)
	layer = dispatch_plan(renderer, layer, geometry, plan, regular_font, bold_font, font_size)
	return (plan.final_y, layer)
