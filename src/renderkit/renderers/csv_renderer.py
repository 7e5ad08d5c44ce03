"""CSV renderer for tabular string data."""

from __future__ import annotations

import csv as csvlib
import io
from typing import Any, BinaryIO

from renderkit.context import Context, check_context
from renderkit.errors import InvalidDataError, InvalidParamError
from renderkit.format import CRLF
from renderkit.options import SEPARATOR_PARAM, Option, new_options
from renderkit.renderer import Renderer, Sink, mime_csv
from renderkit.renderers.encoding import utf8

_EXPECTED = "sequence of sequences of str"


def as_records(data: Any) -> list[list[str]]:
    """Validate that data is a table of strings.

    Raises:
        InvalidDataError: If data is not a list or tuple of rows whose
            cells are all strings
    """
    if not isinstance(data, (list, tuple)):
        raise InvalidDataError("csv", data, _EXPECTED)

    records: list[list[str]] = []
    for row in data:
        if not isinstance(row, (list, tuple)) or not all(isinstance(cell, str) for cell in row):
            raise InvalidDataError("csv", data, _EXPECTED)
        records.append(list(row))
    return records


class CSVRenderer(Renderer):
    """Writes rows of strings as CSV.

    The separator is the first character of the "separator" parameter
    (comma by default). Rows end with CRLF when the line ending is set to
    "\\r\\n" and with LF otherwise.
    """

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        options = new_options().use(mime_csv()).use(*opts)

        delimiter = ","
        if sep := options.params.get(SEPARATOR_PARAM):
            delimiter = sep[0]
        terminator = CRLF if options.format.newline == CRLF else "\n"

        records = as_records(data)

        buf = io.StringIO()
        try:
            writer = csvlib.writer(buf, delimiter=delimiter, lineterminator=terminator)
            writer.writerows(records)
        except (csvlib.Error, TypeError, ValueError) as e:
            raise InvalidParamError(SEPARATOR_PARAM, str(e)) from e

        sink.write(utf8(buf.getvalue(), "csv encode"))


def csv() -> Renderer:
    """Create a CSV renderer."""
    return CSVRenderer()
