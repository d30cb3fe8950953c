"""
Code 128 barcode encoding and rasterization.
"""

# PIP3 modules
import barcode
import barcode.errors
import PIL.Image
import reportlab.lib.utils

# local repo modules
import pdf_table_grid as ptg
import pdf_table_grid.config
import pdf_table_grid.errors


EncodingError = ptg.errors.EncodingError
ImageDecodeError = ptg.errors.ImageDecodeError

DEFAULT_BARCODE_HEIGHT = ptg.config.DEFAULT_BARCODE_HEIGHT
BARCODE_MODULE_WIDTH = ptg.config.BARCODE_MODULE_WIDTH
BARCODE_QUIET_ZONE = ptg.config.BARCODE_QUIET_ZONE
BARCODE_MODULE_MM = ptg.config.BARCODE_MODULE_MM

BLACK = b"\x00\x00\x00"
WHITE = b"\xff\xff\xff"


#============================================
def check_content(content: str) -> None:
	"""
	Reject content outside the printable ASCII range.

	Args:
		content: Text to encode.
	"""
	if not content:
		raise EncodingError("Barcode content must not be empty")
	for index, char in enumerate(content):
		if not " " <= char <= "~":
			raise EncodingError(
				f"Character {char!r} at position {index} is not supported by Code 128"
			)


#============================================
def encode_modules(content: str) -> str:
	"""
	Encode content into a string of bar (1) and space (0) modules.

	Args:
		content: Printable ASCII text.

	Returns:
		Module string, start and stop patterns included.
	"""
	check_content(content)
	try:
		symbol = barcode.Code128(content)
		modules = "".join(symbol.build())
	except barcode.errors.BarcodeError as error:
		raise EncodingError(f"Cannot encode {content!r}: {error}") from error
	return modules


#============================================
def rasterize_modules(
	modules: str,
	height: int,
	module_width: int = BARCODE_MODULE_WIDTH,
	quiet_zone: int = BARCODE_QUIET_ZONE,
) -> PIL.Image.Image:
	"""
	Rasterize modules into an RGB image, each bar spanning the full height.

	Args:
		modules: Module string from encode_modules.
		height: Image height in pixels.
		module_width: Pixels per module.
		quiet_zone: White modules added on each side.

	Returns:
		RGB image.
	"""
	if height <= 0:
		raise ValueError(f"Barcode height must be positive, got {height}")
	padded = "0" * quiet_zone + modules + "0" * quiet_zone
	row = b"".join((BLACK if module == "1" else WHITE) * module_width for module in padded)
	width = len(padded) * module_width
	return PIL.Image.frombytes("RGB", (width, height), row * height)


#============================================
def encode_and_rasterize(content: str, height: int = DEFAULT_BARCODE_HEIGHT) -> PIL.Image.Image:
	"""
	Encode content as Code 128 and rasterize it.

	Args:
		content: Printable ASCII text.
		height: Image height in pixels.

	Returns:
		RGB image of the requested height.
	"""
	modules = encode_modules(content)
	return rasterize_modules(modules, height)


#============================================
def barcode_image_reader(image: PIL.Image.Image) -> reportlab.lib.utils.ImageReader:
	"""
	Hand a rasterized barcode to reportlab without re-encoding it.
	"""
	try:
		return reportlab.lib.utils.ImageReader(image)
	except (OSError, ValueError) as error:
		raise ImageDecodeError(f"Barcode image rejected: {error}") from error


#============================================
def printed_width(image: PIL.Image.Image, module_width: int = BARCODE_MODULE_WIDTH) -> float:
	"""
	Printed width in millimetres for an image at BARCODE_MODULE_MM per module.
	"""
	return image.width / module_width * BARCODE_MODULE_MM


#============================================
def place_barcode(
	renderer,
	layer,
	content: str,
	x: float,
	y: float,
	print_height: float,
	pixel_height: int = DEFAULT_BARCODE_HEIGHT,
) -> tuple[float, float]:
	"""
	Encode content and draw it with its lower left corner at (x, y).

	Args:
		renderer: Rendering collaborator with draw_image.
		layer: Layer handle to draw on.
		content: Printable ASCII text.
		x: Left edge.
		y: Bottom edge.
		print_height: Printed height.
		pixel_height: Raster height in pixels.

	Returns:
		Tuple of (printed width, printed height).
	"""
	image = encode_and_rasterize(content, pixel_height)
	image_reader = barcode_image_reader(image)
	width = printed_width(image)
	renderer.draw_image(layer, image_reader, x, y, width, print_height)
	return (width, print_height)
