"""Exceptions raised by the conversion core."""


class AsciiViewerError(Exception):
    """Base class for every error raised by ascii_viewer."""


class DecodeError(AsciiViewerError):
    """The input bytes are not a decodable raster image."""


class ConfigurationError(AsciiViewerError):
    """Render options are unusable (empty palette, bad width or aspect)."""
