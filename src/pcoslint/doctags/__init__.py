from pcoslint.doctags.extractor import KNOWN_TAGS, extract_docblock, parse_member
from pcoslint.doctags.render import render_docblock

__all__ = ["KNOWN_TAGS", "extract_docblock", "parse_member", "render_docblock"]
