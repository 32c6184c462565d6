from __future__ import annotations

from dataclasses import replace
from typing import Optional
import logging

from .. import config
from ..config import ReportDefaults
from ..errors import ConfigurationError, RenderError, ReportError
from .canvas import FontSet, PageCanvas
from .content import ContinuationHeader, PageFormat, ReportContext, ReportDocument
from .cursor import LayoutCursor
from .measure import continuation_height, measure_header, plan_table_pages, summary_height
from .sections import render_continuation, render_header, render_signature, render_summary
from .tables import render_table

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Runs header, paged table, summaries and signature for one document.

    A fresh canvas and cursor are created per `build` call, so one assembler
    can serve many builds sequentially.
    """

    def __init__(
        self,
        defaults: Optional[ReportDefaults] = None,
        page_format: PageFormat | str = PageFormat.A4,
        fonts: Optional[FontSet] = None,
        margin: float = config.PAGE_MARGIN,
        canvas_factory=PageCanvas,
    ) -> None:
        self.defaults = defaults or ReportDefaults()
        self.page_format = page_format
        self.fonts = fonts or FontSet()
        self.margin = margin
        self.canvas_factory = canvas_factory
        self.last_page_count = 0

    def resolve_context(self, context: ReportContext) -> ReportContext:
        return replace(
            context,
            organization=context.organization or self.defaults.library_name,
            address=context.address or self.defaults.address,
            city=context.city or self.defaults.city,
        )

    def institution_lines(self, context: ReportContext) -> tuple[str, ...]:
        resolved = self.resolve_context(context)
        return (resolved.organization, self.defaults.library_desc, resolved.address, resolved.city)

    def _validate(self, cursor: LayoutCursor, document: ReportDocument) -> None:
        table = document.table
        continued = continuation_height(document.profile) + table.header_height + table.row_height
        if not cursor.fits_on_empty_page(continued):
            raise ConfigurationError("Page too small for a continuation header, column header and one row")
        if not cursor.fits_on_empty_page(measure_header(document.header)):
            raise ConfigurationError("Page too small for the report header")
        for block in document.summaries:
            smallest = summary_height(1, block.row_height, block.title_height)
            if not block.is_empty and not cursor.fits_on_empty_page(smallest):
                raise ConfigurationError(f"Page too small for the summary '{block.title}'")
        if document.signature.height > cursor.canvas.top_y - document.signature.reserve:
            raise ConfigurationError("Page too small for the signature block")

    def build(self, document: ReportDocument) -> bytes:
        context = self.resolve_context(document.context)
        canvas = self.canvas_factory(
            self.page_format,
            fonts=self.fonts,
            margin=self.margin,
            title=document.pdf_title or context.title,
            author=document.pdf_author or self.defaults.author,
        )
        profile = document.profile
        header = document.header
        if not header.left_lines:
            header = replace(header, left_lines=self.institution_lines(context))
        cursor = LayoutCursor(canvas, profile.min_bottom_margin)
        self._validate(cursor, replace(document, header=header))

        continuation = ContinuationHeader(
            title=context.title,
            label=document.continuation_label,
            report_number=context.report_number,
            report_date=context.report_date,
            height=profile.continuation_height,
            gap=profile.continuation_gap,
        )

        try:
            render_header(canvas, cursor, header)
            cursor.advance(profile.header_gap)
            table = document.table
            planned = plan_table_pages(
                len(table.rows) + (1 if table.footer is not None else 0),
                cursor.remaining(),
                cursor.content_height - continuation_height(profile),
                table.row_height,
                table.header_height,
            )
            logger.debug("%s table rows per page: %s", table.kind.value, planned)
            render_table(canvas, cursor, table, lambda c: render_continuation(canvas, c, continuation))
            for block in document.summaries:
                if block.is_empty:
                    continue
                cursor.advance(profile.section_spacing)
                render_summary(canvas, cursor, block)
            render_signature(canvas, cursor, document.signature)
            self.last_page_count = canvas.page_number
            data = canvas.finish()
        except ReportError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render {context.report_number}: {exc}") from exc

        logger.info("Built %s (%s pages, %s bytes)", context.report_number, self.last_page_count, len(data))
        return data
