"""Random protein sampler for annotated genome records.

Extracts CDS translations from GenBank/EMBL files and writes a random,
non-repeating subset of them as multi-FASTA.
"""

__version__ = "1.0.0"
__author__ = "Austin P. Morrissey"
