"""
Physical page geometry.
"""

# Standard Library
import dataclasses

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.config
import pdf_table_grid.errors


PAGE_SIZES = ptg.config.PAGE_SIZES
DEFAULT_MARGIN = ptg.config.DEFAULT_MARGIN
IndexOutOfRange = ptg.errors.IndexOutOfRange
GridValidationError = ptg.errors.GridValidationError


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	width: float
	height: float
	margin_width: float
	margin_height: float

	def __post_init__(self) -> None:
		for name in ("width", "height", "margin_width", "margin_height"):
			if getattr(self, name) <= 0.0:
				raise GridValidationError(f"Page {name} must be positive")
		if self.inner_width <= 0.0 or self.inner_height <= 0.0:
			raise GridValidationError(
				f"Margins {self.margin_width}x{self.margin_height} leave no room "
				f"on a {self.width}x{self.height} page"
			)

	@property
	def inner_width(self) -> float:
		return self.width - self.margin_width * 2.0

	@property
	def inner_height(self) -> float:
		return self.height - self.margin_height * 2.0

	#============================================
	def column_x(self, column_index: int, total_columns: int, y: float) -> tuple[float, float]:
		"""
		Compute the left edge of an evenly spaced column.

		The y value is capped at the inner height. There is no lower
		bound, negative values pass through unchanged.

		Args:
			column_index: Zero based column index.
			total_columns: Number of equal columns across the inner width.
			y: Candidate y position.

		Returns:
			Tuple of (x, y).
		"""
		if column_index >= total_columns:
			raise IndexOutOfRange(
				f"Column index {column_index} must be less than {total_columns}"
			)
		column_size = self.inner_width / total_columns
		x = self.margin_width + column_size * column_index
		return (x, min(self.inner_height, y))

	#============================================
	@classmethod
	def from_preset(cls, name: str, margin: float = DEFAULT_MARGIN) -> "PageGeometry":
		"""
		Build a page from a named paper size.

		Args:
			name: Preset name, case insensitive ("A4").
			margin: Margin on both axes.

		Returns:
			PageGeometry.
		"""
		key = name.strip().upper()
		if key not in PAGE_SIZES:
			raise KeyError(f"Unknown page size {name!r}, expected one of {sorted(PAGE_SIZES)}")
		width, height = PAGE_SIZES[key]
		return cls(width=width, height=height, margin_width=margin, margin_height=margin)

	@classmethod
	def a1(cls) -> "PageGeometry":
		return cls.from_preset("A1")

	@classmethod
	def a2(cls) -> "PageGeometry":
		return cls.from_preset("A2")

	@classmethod
	def a3(cls) -> "PageGeometry":
		return cls.from_preset("A3")

	@classmethod
	def a4(cls) -> "PageGeometry":
		return cls.from_preset("A4")

	@classmethod
	def a5(cls) -> "PageGeometry":
		return cls.from_preset("A5")
