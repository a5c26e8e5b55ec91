"""CDS feature extraction from annotated genome records."""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Union

from Bio import SeqIO
from Bio.Seq import UndefinedSequenceError
from Bio.SeqFeature import SeqFeature
from Bio.SeqRecord import SeqRecord

from .error_handler import (
    EmptyTranslationError,
    InputFileError,
    MissingIdentifierError,
)
from .models import ProteinRecord

logger = logging.getLogger(__name__)

IdentifierResolver = Callable[[SeqFeature], Optional[str]]
TranslationResolver = Callable[[SeqFeature, SeqRecord], Optional[str]]

FORMAT_BY_EXTENSION = {
    '.gb': 'genbank',
    '.gbk': 'genbank',
    '.gbff': 'genbank',
    '.genbank': 'genbank',
    '.embl': 'embl',
    '.em': 'embl',
}
DEFAULT_FORMAT = 'genbank'


def guess_format(path: Union[str, Path]) -> str:
    """Guess the SeqIO format name from a file extension."""
    return FORMAT_BY_EXTENSION.get(Path(path).suffix.lower(), DEFAULT_FORMAT)


def first_qualifier(feature: SeqFeature, name: str) -> Optional[str]:
    """Return the first value of a qualifier, or None if absent."""
    values = feature.qualifiers.get(name)
    if not values:
        return None
    # Some parsers store single values as plain strings
    if isinstance(values, str):
        return values
    return values[0]


def feature_start(feature: SeqFeature) -> int:
    """1-based start coordinate of a feature."""
    return int(feature.location.start) + 1


def feature_end(feature: SeqFeature) -> int:
    """1-based inclusive end coordinate of a feature."""
    return int(feature.location.end)


def locus_tag_id(feature: SeqFeature) -> Optional[str]:
    return first_qualifier(feature, 'locus_tag')


def protein_id_id(feature: SeqFeature) -> Optional[str]:
    return first_qualifier(feature, 'protein_id')


def coordinate_id(feature: SeqFeature) -> str:
    """Fabricate an ID like CDS_1306_1674 from the feature coordinates."""
    return f"CDS_{feature_start(feature)}_{feature_end(feature)}"


def stored_translation(feature: SeqFeature, entry: SeqRecord) -> Optional[str]:
    """First /translation value, or None when the qualifier is absent.

    A present but empty qualifier returns "" so the feature is not translated
    from its sequence instead.
    """
    if 'translation' not in feature.qualifiers:
        return None
    return first_qualifier(feature, 'translation') or ''


def computed_translation(feature: SeqFeature, entry: SeqRecord) -> Optional[str]:
    """Translate the feature's own nucleotide sequence.

    Honours the transl_table and codon_start qualifiers. Stop codons are
    kept as '*'.
    """
    try:
        return str(feature.translate(entry.seq, cds=False))
    except UndefinedSequenceError:
        logger.debug(f"No sequence data in entry {entry.id} to translate from")
        return None


class FeatureExtractor:
    """Extracts protein records from the CDS features of annotated entries."""

    FEATURE_TYPE = 'CDS'

    def __init__(self, fabricate_ids: bool = False,
                 id_resolvers: Optional[Sequence[IdentifierResolver]] = None,
                 translation_resolvers: Optional[Sequence[TranslationResolver]] = None):
        """Initialize the extractor.

        Args:
            fabricate_ids: Derive IDs from coordinates when a CDS has neither
                a locus_tag nor a protein_id
            id_resolvers: Override the identifier fallback chain
            translation_resolvers: Override the translation fallback chain
        """
        self.fabricate_ids = fabricate_ids

        if id_resolvers is None:
            id_resolvers = [locus_tag_id, protein_id_id]
            if fabricate_ids:
                id_resolvers.append(coordinate_id)
        self.id_resolvers = list(id_resolvers)

        if translation_resolvers is None:
            translation_resolvers = [stored_translation, computed_translation]
        self.translation_resolvers = list(translation_resolvers)

        self.record_count = 0

    def resolve_id(self, feature: SeqFeature) -> str:
        """Resolve a feature ID; the first resolver returning a value wins.

        Raises:
            MissingIdentifierError: if no resolver produced an ID
        """
        for resolver in self.id_resolvers:
            feature_id = resolver(feature)
            if feature_id:
                return feature_id
        raise MissingIdentifierError(feature_start(feature))

    def resolve_description(self, feature: SeqFeature) -> str:
        return first_qualifier(feature, 'product') or ''

    def resolve_translation(self, feature: SeqFeature, entry: SeqRecord,
                            feature_id: str) -> str:
        """Resolve the amino-acid sequence for a feature.

        Resolvers return None when they do not apply; the first other result
        is final, even if it is empty.

        Raises:
            EmptyTranslationError: if the final translation has no residues
        """
        for resolver in self.translation_resolvers:
            translation = resolver(feature, entry)
            if translation is None:
                continue
            if not translation.strip():
                raise EmptyTranslationError(feature_id)
            return translation
        raise EmptyTranslationError(feature_id)

    def to_record(self, feature: SeqFeature, entry: SeqRecord) -> ProteinRecord:
        """Build a ProteinRecord from one CDS feature."""
        feature_id = self.resolve_id(feature)
        return ProteinRecord(
            id=feature_id,
            description=self.resolve_description(feature),
            sequence=self.resolve_translation(feature, entry, feature_id),
            start=feature_start(feature),
            end=feature_end(feature),
            entry_id=entry.id
        )

    def extract(self, entries: Iterable[SeqRecord]) -> List[ProteinRecord]:
        """Extract protein records from all CDS features, in file order.

        Any unresolvable feature aborts the whole extraction.
        """
        proteins: List[ProteinRecord] = []
        entry_count = 0

        for entry in entries:
            entry_count += 1
            for feature in entry.features:
                if feature.type != self.FEATURE_TYPE:
                    continue
                proteins.append(self.to_record(feature, entry))
            logger.debug(f"Entry {entry.id}: {len(proteins)} proteins so far")

        self.record_count = len(proteins)
        logger.debug(f"Extracted {self.record_count} proteins from {entry_count} entries")
        return proteins

    def extract_file(self, path: Union[str, Path],
                     file_format: Optional[str] = None) -> List[ProteinRecord]:
        """Parse an annotation file and extract its proteins.

        Args:
            path: GenBank or EMBL file, single or multi-entry
            file_format: SeqIO format name; guessed from the extension if None

        Raises:
            InputFileError: if the file cannot be opened or parsed
        """
        file_format = file_format or guess_format(path)
        logger.debug(f"Reading {path} as {file_format}")

        try:
            with open(path, 'r') as handle:
                return self.extract(SeqIO.parse(handle, file_format))
        except OSError as e:
            raise InputFileError(path, e.strerror or str(e)) from e
        except ValueError as e:
            raise InputFileError(path, f"could not parse as {file_format}: {e}") from e
