from rest_framework.exceptions import ParseError
from rest_framework.negotiation import DefaultContentNegotiation
from rest_framework.parsers import BaseParser


class PlainTextParser(BaseParser):
    """
    Parses ``text/plain`` bodies into a stripped string.
    Used by endpoints whose body is a single value (an email, a code, a flag).
    """

    media_type = 'text/plain'

    def parse(self, stream, media_type=None, parser_context=None):
        parser_context = parser_context or {}
        encoding = parser_context.get('encoding', 'utf-8')
        try:
            return stream.read().decode(encoding).strip()
        except UnicodeDecodeError as exc:
            raise ParseError(f'Plain text parse error - {exc}')


class PlainTextContentNegotiation(DefaultContentNegotiation):
    """A body sent without a Content-Type is read as plain text."""

    def select_parser(self, request, parsers):
        if not request.content_type:
            for parser in parsers:
                if isinstance(parser, PlainTextParser):
                    return parser
        return super().select_parser(request, parsers)
