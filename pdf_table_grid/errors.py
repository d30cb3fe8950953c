"""
Error kinds raised by the layout core.
"""


class LayoutError(Exception):
	"""Base exception for all layout errors."""

	pass


class IndexOutOfRange(LayoutError, IndexError):
	"""A row or column index was at or past its bound."""

	pass


class GridValidationError(LayoutError, ValueError):
	"""A grid model does not describe a well formed table."""

	pass


class EncodingError(LayoutError, ValueError):
	"""Barcode content cannot be expressed in the symbology."""

	pass


class ImageDecodeError(LayoutError):
	"""A rasterized barcode was rejected by the PDF image reader."""

	pass
