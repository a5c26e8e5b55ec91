"""Command-line interface for the protein sampler."""

import sys
from pathlib import Path

import click

from .cli_utils import echo, set_quiet_mode
from .config import Config, FILE_FORMATS, LOG_LEVELS, get_default_config_path
from .error_handler import ProteinSamplerError, setup_error_handler
from .feature_extractor import FeatureExtractor
from .logging_config import LogTimer, get_logger, setup_logging
from .output_formatter import FastaWriter
from .sampler import SAMPLING_METHODS, RandomSampler

logger = get_logger('cli')


def run_pipeline(input_file, output_file, count: int, cfg: Config) -> int:
    """Extract, sample and write proteins; returns the number written.

    The output file is only opened once sampling has succeeded.
    """
    extractor = FeatureExtractor(fabricate_ids=cfg.extraction.fabricate_ids)
    with LogTimer("Feature extraction"):
        proteins = extractor.extract_file(input_file, cfg.extraction.file_format)
    logger.info(f"found {extractor.record_count} proteins")

    sampler = RandomSampler(seed=cfg.sampling.seed, method=cfg.sampling.method)
    with LogTimer("Sampling"):
        sampled = sampler.sample(proteins, count)

    writer = FastaWriter(line_width=cfg.output.line_width)
    written = writer.write(sampled, output_file)
    logger.info(f"wrote {written} of {extractor.record_count} proteins to {output_file}")
    return written


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--input_file', '-i', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Input GenBank/EMBL file, single or multi-entry')
@click.option('--output_file', '-o', required=True,
              type=click.Path(dir_okay=False),
              help='Output multi-FASTA file to be created')
@click.option('--count', '-c', required=True, type=click.IntRange(min=1),
              help='Number of random proteins to write')
@click.option('--fabricate_ids', '-f', type=click.Choice(['0', '1']), default=None,
              help='1 to derive missing IDs from coordinates, like CDS_656_1204 [default: 0]')
@click.option('--log', '-l', 'log_file', type=click.Path(dir_okay=False),
              help='Log file to append to')
@click.option('--format', 'file_format', type=click.Choice(FILE_FORMATS),
              help='Input format (guessed from the extension if not given)')
@click.option('--seed', '-s', type=int, help='Random seed for a reproducible sample')
@click.option('--method', type=click.Choice(SAMPLING_METHODS),
              help='Sampling algorithm [default: auto]')
@click.option('--line-width', type=click.IntRange(min=1),
              help='Residues per FASTA line [default: 60]')
@click.option('--config', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help='Logging level [default: INFO]')
@click.option('--error-report', type=click.Path(dir_okay=False),
              help='Write a JSON error report here if the run fails')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
def main(input_file, output_file, count, fabricate_ids, log_file, file_format, seed,
         method, line_width, config, log_level, error_report, verbose, quiet):
    """Extract a random set of proteins from a GenBank file.

    Reads every CDS feature, taking IDs from locus_tag, then protein_id, and
    translations from the /translation qualifier or by translating the
    feature sequence. COUNT distinct proteins are drawn at random and
    written as multi-FASTA in draw order.

    Examples:
        protein-sampler -i genome.gbk -o sample.fsa -c 25
        protein-sampler -i genome.gbk -o sample.fsa -c 25 -f 1 --seed 7
    """
    if quiet and verbose:
        raise click.UsageError("Cannot use both --quiet and --verbose")
    set_quiet_mode(quiet)

    config_path = Path(config) if config else get_default_config_path()
    try:
        cfg = Config.from_file(config_path)
        cfg.merge_cli_args(
            fabricate_ids=int(fabricate_ids) if fabricate_ids is not None else None,
            file_format=file_format,
            seed=seed,
            method=method,
            line_width=line_width,
            log_file=log_file,
            log_level='DEBUG' if verbose else log_level
        )
        cfg.validate()
    except ValueError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)

    try:
        setup_logging(
            log_level=cfg.logging.level,
            log_file=cfg.logging.log_file,
            quiet=quiet
        )
    except OSError as e:
        raise click.FileError(str(cfg.logging.log_file), hint=e.strerror or str(e))

    error_handler = setup_error_handler()

    try:
        written = run_pipeline(input_file, output_file, count, cfg)
    except ProteinSamplerError as e:
        error_handler.handle_error(e, operation="sample_proteins", item_id=str(input_file))
        if error_report:
            error_handler.export_error_report(error_report)
        sys.exit(1)

    echo(f"found {written} records")
