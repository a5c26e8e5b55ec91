"""Shared fixtures for building annotated records."""

import logging
import tempfile
from pathlib import Path

import pytest
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqFeature import SeqFeature, SimpleLocation
from Bio.SeqRecord import SeqRecord

# ATG GCC AAA TAA -> M A K *
ORF = "ATGGCCAAATAA"


def make_cds(start, end, strand=1, feature_type="CDS", **qualifiers):
    """Build a feature from 1-based inclusive coordinates."""
    return SeqFeature(
        SimpleLocation(start - 1, end, strand=strand),
        type=feature_type,
        qualifiers={key: [value] for key, value in qualifiers.items()}
    )


def make_entry(features, sequence="ATG" * 700, entry_id="NC_000001"):
    record = SeqRecord(
        Seq(sequence),
        id=entry_id,
        name=entry_id,
        description="test entry",
        annotations={"molecule_type": "DNA"}
    )
    record.features.extend(features)
    return record


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def five_protein_entry():
    """One entry with five tagged CDS features and a gene feature."""
    features = [make_cds(1, 90, feature_type="gene", locus_tag="RF_gene")]
    for i in range(5):
        start = 1 + i * 300
        features.append(make_cds(
            start, start + 269,
            locus_tag=f"RF_p{i:02d}",
            product=f"hypothetical protein {i}",
            translation="M" + "ACDEFGHIKL"[i] * 89
        ))
    return make_entry(features)


@pytest.fixture
def write_genbank(temp_dir):
    """Factory writing entries to a GenBank file and returning its path."""
    def _write(entries, name="input.gbk", file_format="genbank"):
        path = temp_dir / name
        SeqIO.write(entries, str(path), file_format)
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams from a previous test."""
    yield
    logger = logging.getLogger("protein_sampler")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
