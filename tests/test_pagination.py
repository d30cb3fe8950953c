import pytest

import pdf_table_grid.errors
import pdf_table_grid.geometry
import pdf_table_grid.grid
import pdf_table_grid.paginate


PageGeometry = pdf_table_grid.geometry.PageGeometry
Column = pdf_table_grid.grid.Column
GridModel = pdf_table_grid.grid.GridModel
paginate = pdf_table_grid.paginate


class RecordingRenderer:
	"""Captures collaborator calls in order."""

	def __init__(self) -> None:
		self.calls: list[tuple] = []
		self.pages = 0

	def create_page(self, width: float, height: float, label: str) -> tuple[str, str]:
		self.pages += 1
		self.calls.append(("page", width, height, label))
		return (f"page-{self.pages}", f"layer-{self.pages}")

	def draw_text(self, layer, text, font_size, x, y, font_ref) -> None:
		self.calls.append(("text", layer, text, font_size, x, y, font_ref))

	def draw_polygon(self, layer, points, closed, filled, stroked) -> None:
		self.calls.append(("polygon", layer, tuple(points), closed, filled, stroked))


#============================================
def short_page() -> PageGeometry:
	"""
	A page whose table area holds the header and three data rows.
	"""
	return PageGeometry(width=100.0, height=57.5, margin_width=10.0, margin_height=10.0)


#============================================
def build_grid(row_count: int, borders: bool = False, row_height: float = 7.5) -> GridModel:
	"""
	Two equal columns, header plus numbered rows.
	"""
	rows = [["Name", "Qty"]]
	for index in range(1, row_count):
		rows.append([f"item{index}", str(index)])
	return GridModel(
		columns=[Column(6), Column(6)],
		rows=rows,
		position_y=47.5,
		borders=borders,
		row_height=row_height,
	)


#============================================
def text_placements(plan: pdf_table_grid.paginate.TablePlan) -> list:
	return [placement for placement in plan.placements if placement.kind == paginate.TEXT]


#============================================
def test_single_page_table() -> None:
	"""
	A table that fits draws the header once and every row in order.
	"""
	page = short_page()
	grid = build_grid(3)
	plan = paginate.plan_table(page, grid, 47.5)
	assert plan.pages_created == 0
	assert plan.page_breaks() == []
	texts = text_placements(plan)
	assert [placement.text for placement in texts] == ["Name", "Qty", "item1", "1", "item2", "2"]
	assert [placement.bold for placement in texts] == [True, True, False, False, False, False]
	assert [placement.anchor.y for placement in texts[::2]] == [40.0, 32.5, 25.0]
	assert plan.final_y == 25.0


#============================================
def test_break_at_threshold_repeats_header() -> None:
	"""
	The row after the cursor reaches the break band starts page 2 under a fresh header.
	"""
	page = short_page()
	grid = build_grid(6)
	plan = paginate.plan_table(page, grid, 47.5)

	breaks = plan.page_breaks()
	assert len(breaks) == 1
	assert breaks[0].row_index == 4
	assert breaks[0].page == 1

	texts = text_placements(plan)
	first_page = [placement for placement in texts if placement.page == 0]
	second_page = [placement for placement in texts if placement.page == 1]
	assert [placement.anchor.y for placement in first_page[::2]] == [40.0, 32.5, 25.0, 17.5]
	assert [placement.text for placement in second_page] == ["Name", "Qty", "item4", "4", "item5", "5"]
	assert [placement.bold for placement in second_page[:2]] == [True, True]
	assert [placement.anchor.y for placement in second_page[::2]] == [40.0, 32.5, 25.0]
	assert plan.final_y == 25.0
	assert plan.final_state.row_offset == 4


#============================================
def test_no_break_just_above_threshold() -> None:
	"""
	A cursor a hair above the band keeps printing on the same page.
	"""
	page = short_page()
	assert paginate.needs_page_break(page, 17.5, 7.5)
	assert not paginate.needs_page_break(page, 17.6, 7.5)


#============================================
def test_multiple_breaks_keep_slots_consistent() -> None:
	"""
	Every repeat page holds the header plus three data rows.
	"""
	page = short_page()
	grid = build_grid(12)
	plan = paginate.plan_table(page, grid, 47.5)
	texts = text_placements(plan)
	assert plan.pages_created == 3
	for page_number in range(1, plan.pages_created + 1):
		names = [placement for placement in texts if placement.page == page_number and placement.column_index == 0]
		assert names[0].text == "Name"
		assert names[0].anchor.y == 40.0
		assert [placement.anchor.y for placement in names[1:]] == [32.5, 25.0, 17.5][: len(names) - 1]
	data_rows = [placement.row_index for placement in texts if not placement.bold and placement.column_index == 0]
	assert data_rows == list(range(1, 12))


#============================================
def test_break_before_first_row() -> None:
	"""
	A table starting inside the break band moves wholly to a new page.
	"""
	page = short_page()
	grid = build_grid(3)
	plan = paginate.plan_table(page, grid, 15.0)
	assert plan.pages_created == 1
	texts = text_placements(plan)
	assert all(placement.page == 1 for placement in texts)
	assert [placement.text for placement in texts] == ["Name", "Qty", "item1", "1", "item2", "2"]
	assert [placement.anchor.y for placement in texts[::2]] == [40.0, 32.5, 25.0]


#============================================
def test_state_fold_does_not_mutate_grid() -> None:
	"""
	The table top lives in the fold state, the grid keeps its own value.
	"""
	page = short_page()
	grid = build_grid(8)
	grid.position_y = 30.0
	plan = paginate.plan_table(page, grid, 30.0)
	assert grid.position_y == 30.0
	assert plan.final_state.position_y == pytest.approx(47.5)


#============================================
def test_borders_precede_text() -> None:
	"""
	With borders on, each cell emits its rectangle then its text.
	"""
	page = short_page()
	grid = build_grid(2, borders=True)
	plan = paginate.plan_table(page, grid, 47.5)
	kinds = [placement.kind for placement in plan.placements]
	assert kinds == [paginate.BORDER, paginate.TEXT] * 4
	border = plan.placements[0]
	assert len(border.points) == 4
	assert border.points[0].y == pytest.approx(47.5 - 3.75)


#============================================
def test_layout_dispatches_to_renderer() -> None:
	"""
	layout_table drives the collaborator and returns the last layer.
	"""
	page = short_page()
	grid = build_grid(6, borders=True)
	renderer = RecordingRenderer()
	final_y, layer = paginate.layout_table(
		renderer,
		"layer-0",
		page,
		grid,
		47.5,
		"Helvetica",
		"Helvetica-Bold",
		font_size=10.0,
	)
	assert layer == "layer-1"
	assert final_y == pytest.approx(24.0)

	page_calls = [call for call in renderer.calls if call[0] == "page"]
	assert page_calls == [("page", 100.0, 57.5, "1")]
	page_index = renderer.calls.index(page_calls[0])
	before = renderer.calls[:page_index]
	after = renderer.calls[page_index + 1:]
	assert all(call[1] == "layer-0" for call in before)
	assert all(call[1] == "layer-1" for call in after)

	polygons = [call for call in renderer.calls if call[0] == "polygon"]
	assert all(call[3:] == (True, False, True) for call in polygons)
	texts = [call for call in after if call[0] == "text"]
	assert [call[6] for call in texts[:2]] == ["Helvetica-Bold", "Helvetica-Bold"]
	assert texts[2][6] == "Helvetica"
	assert all(call[3] == 10.0 for call in texts)


#============================================
def test_threshold_mismatch_flagged() -> None:
	"""
	A row height other than the break margin is reported, not corrected.
	"""
	page = short_page()
	assert paginate.plan_table(page, build_grid(3), 47.5).threshold_mismatch is False
	plan = paginate.plan_table(page, build_grid(3, row_height=5.0), 47.5)
	assert plan.threshold_mismatch is True
	assert plan.final_y == pytest.approx(47.5 - 3 * 5.0)


#============================================
def test_empty_table_rejected() -> None:
	"""
	A table without a header row cannot be laid out.
	"""
	page = short_page()
	grid = GridModel(columns=[Column(6), Column(6)], rows=[], position_y=47.5)
	with pytest.raises(pdf_table_grid.errors.GridValidationError):
		paginate.plan_table(page, grid, 47.5)
