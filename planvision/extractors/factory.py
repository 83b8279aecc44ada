from planvision.config.settings import Settings
from planvision.documents.models import FormatStrategy
from planvision.extractors.base import BaseTextExtractor
from planvision.extractors.pdf_extractor import PdfTextExtractor
from planvision.extractors.placeholder_extractor import (
    IMAGE_PLACEHOLDER,
    WORD_DOCUMENT_PLACEHOLDER,
    PlaceholderExtractor,
)
from planvision.extractors.plain_text_extractor import PlainTextExtractor
from planvision.extractors.spreadsheet_extractor import SpreadsheetTextExtractor
from planvision.pdf.base import BasePdfExtractor
from planvision.pdf.factory import PdfExtractorFactory


class TextExtractorFactory:
    """Holds one text extractor per format strategy."""

    def __init__(self, extractors: dict[FormatStrategy, BaseTextExtractor]) -> None:
        missing = set(FormatStrategy) - set(extractors)
        if missing:
            names = sorted(strategy.value for strategy in missing)
            raise ValueError(f"No text extractor registered for: {names}")
        self._extractors = dict(extractors)

    def for_strategy(self, strategy: FormatStrategy) -> BaseTextExtractor:
        return self._extractors[strategy]

    @classmethod
    def create(
        cls,
        settings: Settings,
        pdf_adapter: BasePdfExtractor | None = None,
    ) -> "TextExtractorFactory":
        max_chars = settings.max_text_chars
        adapter = pdf_adapter or PdfExtractorFactory.create(settings)
        return cls(
            {
                FormatStrategy.PDF: PdfTextExtractor(adapter, max_chars),
                FormatStrategy.SPREADSHEET: SpreadsheetTextExtractor(max_chars),
                FormatStrategy.PLAIN_TEXT: PlainTextExtractor(max_chars),
                FormatStrategy.IMAGE: PlaceholderExtractor(IMAGE_PLACEHOLDER, max_chars),
                FormatStrategy.UNSUPPORTED: PlaceholderExtractor(
                    WORD_DOCUMENT_PLACEHOLDER, max_chars
                ),
            }
        )
