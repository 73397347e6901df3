"""sdfatlas - Signed distance field glyph atlases for scalable text.

sdfatlas rasterizes a character set, converts every glyph into a signed
distance field, packs the fields into a single atlas image and wraps the
result in a FontAsset that can lay out, measure and emit quads for text.

Example:
    $ sdfatlas build Roboto-Regular.ttf -o roboto.sdfa

This will create roboto.sdfa containing the atlas image and glyph metadata
for the printable ASCII range.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
