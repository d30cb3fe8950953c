"""
Table grid model: column proportions, rows and row height.
"""

# Standard Library
import dataclasses

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.config
import pdf_table_grid.errors


DEFAULT_MAX_COLUMNS = ptg.config.DEFAULT_MAX_COLUMNS
DEFAULT_ROW_HEIGHT = ptg.config.DEFAULT_ROW_HEIGHT
DEFAULT_COLUMN_WEIGHTS = ptg.config.DEFAULT_COLUMN_WEIGHTS
DEFAULT_COLUMN_WEIGHT = ptg.config.DEFAULT_COLUMN_WEIGHT
GridValidationError = ptg.errors.GridValidationError


@dataclasses.dataclass(frozen=True)
class Column:
	width: int = DEFAULT_COLUMN_WEIGHT


@dataclasses.dataclass
class GridModel:
	"""
	Ordered columns and rows laid over a grid of max_columns units.

	The first row is the header. position_y is the top of the table on
	the page it starts on; layout never writes to it.
	"""
	columns: list[Column]
	rows: list[list[str]] = dataclasses.field(default_factory=list)
	position_y: float = 0.0
	max_columns: int = DEFAULT_MAX_COLUMNS
	borders: bool = False
	row_height: float = DEFAULT_ROW_HEIGHT

	def __post_init__(self) -> None:
		self.columns = list(self.columns)
		self.rows = [[str(cell) for cell in row] for row in self.rows]
		self.validate()

	#============================================
	def validate(self) -> None:
		"""
		Fail fast on a grid that would produce malformed geometry.
		"""
		if self.max_columns <= 0:
			raise GridValidationError(f"max_columns must be positive, got {self.max_columns}")
		if self.row_height <= 0.0:
			raise GridValidationError(f"row_height must be positive, got {self.row_height}")
		if not self.columns:
			raise GridValidationError("A table needs at least one column")
		for index, column in enumerate(self.columns):
			if isinstance(column.width, bool) or not isinstance(column.width, int) or column.width <= 0:
				raise GridValidationError(
					f"Column {index} width must be a positive integer, got {column.width!r}"
				)
		total = self.total_weight()
		if total > self.max_columns:
			raise GridValidationError(
				f"Column widths sum to {total} which exceeds {self.max_columns} grid units"
			)
		for index, row in enumerate(self.rows):
			self._check_row(index, row)

	def _check_row(self, index: int, row: list[str]) -> None:
		if len(row) != len(self.columns):
			raise GridValidationError(
				f"Row {index} has {len(row)} cells but the table has {len(self.columns)} columns"
			)

	def total_weight(self) -> int:
		return sum(column.width for column in self.columns)

	@property
	def header(self) -> list[str]:
		if not self.rows:
			raise GridValidationError("Table has no header row")
		return self.rows[0]

	#============================================
	def set_borders(self, borders_on: bool) -> None:
		self.borders = borders_on

	def add_row(self, row: list[str]) -> None:
		"""
		Append a row after checking its cell count.

		Args:
			row: Cell text values, one per column.
		"""
		row = [str(cell) for cell in row]
		self._check_row(len(self.rows), row)
		self.rows.append(row)

	def set_columns(self, columns: list[Column]) -> None:
		previous = self.columns
		self.columns = list(columns)
		try:
			self.validate()
		except GridValidationError:
			self.columns = previous
			raise

	def set_max_columns(self, max_columns: int) -> None:
		previous = self.max_columns
		self.max_columns = max_columns
		try:
			self.validate()
		except GridValidationError:
			self.max_columns = previous
			raise

	def set_row_height(self, row_height: float) -> None:
		if row_height <= 0.0:
			raise GridValidationError(f"row_height must be positive, got {row_height}")
		self.row_height = row_height


#============================================
def columns_from_weights(weights: tuple[int, ...] | list[int]) -> list[Column]:
	"""
	Build columns from integer weights.
	"""
	return [Column(width=weight) for weight in weights]


#============================================
def default_grid(position_y: float) -> GridModel:
	"""
	Build the stock four column table (6/2/2/2 of 12 units).

	Args:
		position_y: Top of the table on the first page.

	Returns:
		GridModel with no rows.
	"""
	return GridModel(
		columns=columns_from_weights(DEFAULT_COLUMN_WEIGHTS),
		rows=[],
		position_y=position_y,
		max_columns=DEFAULT_MAX_COLUMNS,
		borders=False,
		row_height=DEFAULT_ROW_HEIGHT,
	)
