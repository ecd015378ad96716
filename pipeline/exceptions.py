from typing import Optional


class ExtractionError(Exception):
    """Base class for failures that stop an extraction from producing a record."""


class EmptyOrIllegibleDocument(ExtractionError):
    """The document text is missing or too short to contain a purchase order."""

    def __init__(self, file_name: Optional[str] = None, length: int = 0):
        self.file_name = file_name
        self.length = length
        super().__init__(
            "O conteúdo do documento está vazio ou é muito curto para ser processado."
        )
