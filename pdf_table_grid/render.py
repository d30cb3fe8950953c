"""
PDF rendering collaborator backed by a ReportLab canvas.
"""

# Standard Library
import pathlib

# PIP3 modules
import pypdf
import reportlab.lib.units
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.geometry
import pdf_table_grid.locator


PageGeometry = ptg.geometry.PageGeometry
Point = ptg.locator.Point

MM = reportlab.lib.units.mm


class PdfRenderer:
	"""
	Draws onto a ReportLab canvas using millimetre coordinates.

	Layer handles are 1-based page numbers. ReportLab writes pages in
	sequence, so only the current page accepts drawing.
	"""

	def __init__(self, output_path: pathlib.Path, geometry: PageGeometry, title: str | None = None) -> None:
		self.output_path = pathlib.Path(output_path)
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			str(self.output_path),
			pagesize=(geometry.width * MM, geometry.height * MM),
		)
		if title:
			self.pdf.setTitle(title)
		self.page_count = 1
		self.page_labels: list[str] = ["0"]

	def current_layer(self) -> int:
		return self.page_count

	def _check_layer(self, layer: int) -> None:
		if layer != self.page_count:
			raise ValueError(f"Layer {layer} is closed, current page is {self.page_count}")

	#============================================
	def create_page(self, width: float, height: float, label: str) -> tuple[int, int]:
		"""
		Finish the current page and start a new one.

		Args:
			width: Page width.
			height: Page height.
			label: Page label.

		Returns:
			Tuple of (page handle, layer handle).
		"""
		self.pdf.showPage()
		self.pdf.setPageSize((width * MM, height * MM))
		self.page_count += 1
		self.page_labels.append(label)
		return (self.page_count, self.page_count)

	#============================================
	def draw_text(
		self,
		layer: int,
		text: str,
		font_size: float,
		x: float,
		y: float,
		font_ref: str,
	) -> None:
		self._check_layer(layer)
		self.pdf.setFillColorRGB(0.0, 0.0, 0.0)
		self.pdf.setFont(font_ref, font_size)
		self.pdf.drawString(x * MM, y * MM, text)

	#============================================
	def draw_polygon(
		self,
		layer: int,
		points: list[Point],
		closed: bool,
		filled: bool,
		stroked: bool,
	) -> None:
		"""
		Draw a polyline through the given points.

		Args:
			layer: Layer handle.
			points: Ordered points.
			closed: Join the last point back to the first.
			filled: Fill the interior.
			stroked: Stroke the outline.
		"""
		self._check_layer(layer)
		if len(points) < 2:
			return
		path = self.pdf.beginPath()
		path.moveTo(points[0][0] * MM, points[0][1] * MM)
		for point in points[1:]:
			path.lineTo(point[0] * MM, point[1] * MM)
		if closed:
			path.close()
		self.pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
		self.pdf.drawPath(path, stroke=int(stroked), fill=int(filled))

	#============================================
	def draw_image(
		self,
		layer: int,
		image_reader: reportlab.lib.utils.ImageReader,
		x: float,
		y: float,
		width: float,
		height: float,
	) -> None:
		self._check_layer(layer)
		self.pdf.drawImage(
			image_reader,
			x * MM,
			y * MM,
			width=width * MM,
			height=height * MM,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)

	def save(self) -> None:
		self.pdf.save()


#============================================
def count_pdf_pages(path: pathlib.Path) -> int:
	"""
	Read back a written PDF and count its pages.
	"""
	reader = pypdf.PdfReader(str(path))
	return len(reader.pages)
