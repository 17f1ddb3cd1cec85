"""Parser for git's pretty-format output rendered as pseudo-XML records.

``git log`` is asked to print every commit as an ``<item>`` element whose
free-text fields are wrapped in CDATA. The records arrive back to back with
no enclosing root, and commit messages may carry raw control characters that
are not legal in XML, so parsing happens in two passes: a strict one and,
when that fails, one over a sanitized copy of the output.

Only ``message`` and ``body`` are CDATA-wrapped. Author and committer names
are plain element text, so a name containing a bare ``&`` or ``<`` makes the
whole batch fail with MalformedOutputError.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Sequence

from gitter.exceptions import MalformedOutputError, NoDataError
from gitter.logger import get_logger

logger = get_logger(__name__)

CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f]")
PLACEHOLDER = "?"

# Field name -> git placeholder, in template order
COMMIT_FIELDS = (
    ("hash", "%H"),
    ("short_hash", "%h"),
    ("tree", "%T"),
    ("parents", "%P"),
    ("author", "%an"),
    ("author_email", "%ae"),
    ("date", "%at"),
    ("commiter", "%cn"),
    ("commiter_email", "%ce"),
    ("commiter_date", "%ct"),
    ("message", "%s"),
)
BODY_FIELD = ("body", "%b")
CDATA_FIELDS = frozenset({"message", "body"})


def build_template(fields: Sequence = COMMIT_FIELDS, cdata_fields=CDATA_FIELDS) -> str:
    """Render the ``--pretty=format:`` string for the given fields."""
    parts = ["<item>"]
    for name, placeholder in fields:
        if name in cdata_fields:
            parts.append(f"<{name}><![CDATA[{placeholder}]]></{name}>")
        else:
            parts.append(f"<{name}>{placeholder}</{name}>")
    parts.append("</item>")
    return "".join(parts)


def commit_template(with_body: bool = False) -> str:
    fields = COMMIT_FIELDS + (BODY_FIELD,) if with_body else COMMIT_FIELDS
    return build_template(fields)


class PrettyFormat:
    """Turns a pretty-format record stream into a list of field maps."""

    root_tag = "data"
    record_tag = "item"

    def sanitize(self, output: str) -> str:
        """Replace every control character with a placeholder."""
        return CONTROL_CHARACTERS.sub(PLACEHOLDER, output)

    def parse(self, output: str) -> List[Dict[str, Any]]:
        """Parse raw git output into one field map per record.

        Raises:
            NoDataError: output is empty
            MalformedOutputError: output is not well-formed even after sanitizing
        """
        if not output or not output.strip():
            raise NoDataError()

        try:
            root = self._parse_xml(output)
        except ET.ParseError as e:
            logger.warning("Pretty-format output is not well-formed (%s), sanitizing", e)
            try:
                root = self._parse_xml(self.sanitize(output))
            except ET.ParseError as retry_error:
                raise MalformedOutputError(
                    f"Unable to parse pretty-format output: {retry_error}"
                ) from retry_error

        records = self._element_to_dict(root).get(self.record_tag)
        if not isinstance(records, list):
            raise MalformedOutputError(
                f"Pretty-format output holds no <{self.record_tag}> records"
            )

        return records

    def _parse_xml(self, output: str) -> ET.Element:
        return ET.fromstring(f"<{self.root_tag}>{output}</{self.root_tag}>")

    def _element_to_dict(self, element: ET.Element) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for child in element:
            if len(child):
                data.setdefault(child.tag, []).append(self._element_to_dict(child))
                continue

            data[child.tag] = (child.text or "").strip()

        return data
