"""
spaCy integration for unistrip.

Provides a pipeline component that records diacritic-free text on docs
and tokens.

Example:
    >>> import spacy
    >>> nlp = spacy.blank("fr")
    >>> nlp.add_pipe("diacritics_stripper")
    >>> doc = nlp("Déjà vu")
    >>> doc._.stripped
    'Deja vu'
"""

from typing import Optional

from spacy.language import Language
from spacy.tokens import Doc, Token

from unistrip._strip import strip_diacritics

__all__ = [
    "DiacriticsStripperComponent",
    "create_diacritics_stripper",
]


@Language.factory(
    "diacritics_stripper",
    default_config={"lowercase": False},
    assigns=["doc._.stripped", "token._.stripped"],
)
def create_diacritics_stripper(
    nlp: Language,
    name: str,
    lowercase: bool = False,
) -> "DiacriticsStripperComponent":
    """Create a diacritics stripper pipeline component."""
    return DiacriticsStripperComponent(nlp, name, lowercase=lowercase)


class DiacriticsStripperComponent:
    """
    spaCy pipeline component for diacritic stripping.

    Extensions:
        - Doc._.stripped: Full stripped text.
        - Token._.stripped: Stripped token text.

    Note: token.text is never modified.
    """

    def __init__(
        self,
        nlp: Language,
        name: str,
        *,
        lowercase: bool = False,
    ) -> None:
        self.name = name
        self.lowercase = lowercase

        if not Doc.has_extension("stripped"):
            Doc.set_extension("stripped", default=None)
        if not Token.has_extension("stripped"):
            Token.set_extension("stripped", default=None)

    def _strip(self, text: str) -> str:
        if self.lowercase:
            text = text.lower()
        return strip_diacritics(text)

    def __call__(self, doc: Doc) -> Doc:
        doc._.stripped = self._strip(doc.text)

        for token in doc:
            token._.stripped = self._strip(token.text)

        return doc

    def to_disk(self, path: str, *, exclude: tuple[str, ...] = ()) -> None:
        pass

    def from_disk(
        self, path: str, *, exclude: tuple[str, ...] = ()
    ) -> "DiacriticsStripperComponent":
        return self

    def to_bytes(self, *, exclude: tuple[str, ...] = ()) -> bytes:
        return b""

    def from_bytes(
        self, data: bytes, *, exclude: tuple[str, ...] = ()
    ) -> "DiacriticsStripperComponent":
        return self


def get_stripper_pipe(nlp: Language) -> Optional[DiacriticsStripperComponent]:
    """Get the diacritics stripper component from a pipeline."""
    if "diacritics_stripper" in nlp.pipe_names:
        return nlp.get_pipe("diacritics_stripper")
    return None
