"""
CLI entry point: lay out a CSV table into a paginated PDF.
"""

# Standard Library
import argparse
import csv
import json
import pathlib
import time

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.barcode_raster
import pdf_table_grid.config
import pdf_table_grid.geometry
import pdf_table_grid.grid
import pdf_table_grid.paginate
import pdf_table_grid.render


RunConfig = ptg.config.RunConfig
PageGeometry = ptg.geometry.PageGeometry
GridModel = ptg.grid.GridModel
TablePlan = ptg.paginate.TablePlan

PAGE_SIZES = ptg.config.PAGE_SIZES
DEFAULT_PAGE = ptg.config.DEFAULT_PAGE
DEFAULT_MAX_COLUMNS = ptg.config.DEFAULT_MAX_COLUMNS
DEFAULT_ROW_HEIGHT = ptg.config.DEFAULT_ROW_HEIGHT
DEFAULT_BREAK_MARGIN = ptg.config.DEFAULT_BREAK_MARGIN
DEFAULT_COLUMN_WEIGHTS = ptg.config.DEFAULT_COLUMN_WEIGHTS
DEFAULT_FONT_SIZE = ptg.config.DEFAULT_FONT_SIZE
DEFAULT_FONT_REGULAR = ptg.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = ptg.config.DEFAULT_FONT_BOLD
DEFAULT_BARCODE_HEIGHT = ptg.config.DEFAULT_BARCODE_HEIGHT
DEFAULT_BARCODE_PRINT_HEIGHT = ptg.config.DEFAULT_BARCODE_PRINT_HEIGHT
BARCODE_GAP = ptg.config.BARCODE_GAP


#============================================
def build_config(args: argparse.Namespace) -> RunConfig:
	"""
	Build run config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RunConfig.
	"""
	return RunConfig(
		page=args.page,
		column_weights=ptg.config.parse_column_weights(args.columns),
		max_columns=args.max_columns,
		row_height=args.row_height,
		borders=args.borders,
		font_size=args.font_size,
		break_margin=DEFAULT_BREAK_MARGIN,
		barcode=args.barcode,
		barcode_height=args.barcode_height,
		manifest_path=args.manifest_path,
	)


#============================================
def read_rows(path: pathlib.Path) -> list[list[str]]:
	"""
	Read CSV rows, skipping blank lines.

	Args:
		path: CSV path, first row is the header.

	Returns:
		List of rows.
	"""
	with path.open("r", encoding="utf-8", newline="") as handle:
		reader = csv.reader(handle)
		return [row for row in reader if row]


#============================================
def build_grid(rows: list[list[str]], geometry: PageGeometry, config: RunConfig) -> GridModel:
	"""
	Build a grid that starts at the top margin of the first page.
	"""
	return GridModel(
		columns=ptg.grid.columns_from_weights(config.column_weights),
		rows=rows,
		position_y=geometry.height - geometry.margin_height,
		max_columns=config.max_columns,
		borders=config.borders,
		row_height=config.row_height,
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	output_path: pathlib.Path,
	plan: TablePlan,
	config: RunConfig,
	pages: int,
) -> None:
	"""
	Write a manifest JSON file describing the layout run.

	Args:
		manifest_path: Output path.
		input_path: Input CSV path.
		output_path: Output PDF path.
		plan: Table plan.
		config: Run configuration.
		pages: Pages in the written PDF.
	"""
	data = {
		"input": str(input_path),
		"output": str(output_path),
		"pages": pages,
		"page_breaks": plan.pages_created,
		"placements": len(plan.placements),
		"final_y": plan.final_y,
		"threshold_mismatch": plan.threshold_mismatch,
		"layout": {
			"page": config.page,
			"column_weights": list(config.column_weights),
			"max_columns": config.max_columns,
			"row_height": config.row_height,
			"borders": config.borders,
			"font_size": config.font_size,
			"break_margin": config.break_margin,
		},
		"barcode": config.barcode,
		"fonts": {
			"regular": DEFAULT_FONT_REGULAR,
			"bold": DEFAULT_FONT_BOLD,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def place_barcode_below(
	renderer: ptg.render.PdfRenderer,
	layer: int,
	geometry: PageGeometry,
	content: str,
	cursor_y: float,
	print_height: float,
) -> int:
	"""
	Draw a barcode under the table, on a new page when it does not fit.

	Returns:
		Layer handle the barcode was drawn on.
	"""
	bottom_y = cursor_y - BARCODE_GAP - print_height
	if bottom_y < geometry.margin_height:
		_page, layer = renderer.create_page(geometry.width, geometry.height, "barcode")
		bottom_y = geometry.height - geometry.margin_height - print_height
	x, _y = geometry.column_x(0, 1, bottom_y)
	ptg.barcode_raster.place_barcode(
		renderer,
		layer,
		content,
		x,
		bottom_y,
		print_height,
		pixel_height=DEFAULT_BARCODE_HEIGHT,
	)
	return layer


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out a CSV table into a paginated PDF.")
	parser.add_argument("input_path", help="CSV file, first row is the header.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-s", "--page", dest="page", choices=sorted(PAGE_SIZES), default=DEFAULT_PAGE, help="Page size.")
	layout_group.add_argument(
		"-c", "--columns", dest="columns",
		default=",".join(str(weight) for weight in DEFAULT_COLUMN_WEIGHTS),
		help="Comma separated column weights.",
	)
	layout_group.add_argument("-u", "--max-columns", dest="max_columns", type=int, default=DEFAULT_MAX_COLUMNS, help="Grid units across the page.")
	layout_group.add_argument("-r", "--row-height", dest="row_height", type=float, default=DEFAULT_ROW_HEIGHT, help="Row height in mm.")
	layout_group.add_argument("-f", "--font-size", dest="font_size", type=float, default=DEFAULT_FONT_SIZE, help="Font size in points.")
	layout_group.add_argument("-b", "--borders", dest="borders", action="store_true", help="Draw cell borders.")
	layout_group.add_argument("-B", "--no-borders", dest="borders", action="store_false", help="Disable cell borders.")

	barcode_group = parser.add_argument_group("Barcode")
	barcode_group.add_argument("--barcode", dest="barcode", default=None, help="Code 128 content placed under the table.")
	barcode_group.add_argument(
		"--barcode-height", dest="barcode_height", type=float,
		default=DEFAULT_BARCODE_PRINT_HEIGHT, help="Printed barcode height in mm.",
	)

	parser.set_defaults(borders=False)

	args = parser.parse_args()
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the layout from CSV input to PDF output.

	Args:
		args: Parsed argparse namespace.
	"""
	config = build_config(args)
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	print("CSV table to PDF layout")
	print(f"Input CSV: {input_path}")
	print(f"Output PDF: {output_path}")
	print(f"Page size: {config.page}")
	print(f"Column weights: {list(config.column_weights)} of {config.max_columns}")
	print(f"Borders: {config.borders}")
	if config.barcode is not None:
		print(f"Barcode: {config.barcode}")

	start_time = time.perf_counter()
	rows = read_rows(input_path)
	print(f"Rows read: {len(rows)}")

	geometry = PageGeometry.from_preset(config.page)
	grid = build_grid(rows, geometry, config)
	plan = ptg.paginate.plan_table(geometry, grid, grid.position_y, config.break_margin)
	if plan.threshold_mismatch:
		print(
			f"Note: row height {config.row_height} differs from the page break "
			f"margin {config.break_margin}"
		)

	renderer = ptg.render.PdfRenderer(output_path, geometry, title=input_path.stem)
	layer = ptg.paginate.dispatch_plan(
		renderer,
		renderer.current_layer(),
		geometry,
		plan,
		DEFAULT_FONT_REGULAR,
		DEFAULT_FONT_BOLD,
		config.font_size,
	)
	if config.barcode is not None:
		place_barcode_below(
			renderer,
			layer,
			geometry,
			config.barcode,
			plan.final_y,
			config.barcode_height,
		)
	renderer.save()
	pages = ptg.render.count_pdf_pages(output_path)
	print(f"Page breaks: {plan.pages_created}")
	print(f"Pages written: {pages}")

	if config.manifest_path is not None:
		manifest_path = pathlib.Path(config.manifest_path)
		write_manifest(manifest_path, input_path, output_path, plan, config, pages)
		print(f"Manifest written: {manifest_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)


if __name__ == "__main__":
	main()
