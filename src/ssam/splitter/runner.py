import sys
from typing import Optional, Tuple

import click

from ssam import __version__
from ssam.errors import SamplerError
from ssam.splitter.config import SamplerConfig, load_config, parse_seed, split_list
from ssam.splitter.registry import policy_registry
from ssam.splitter.splitter import SplitSampler, print_report


@click.command()
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option(
    "--delimiter", "-d",
    default=None,
    type=str,
    help="Delimiter that separates units, checked per line; an empty string separates units by an empty line. "
         "If unset, each line is a unit in its own right",
)
@click.option(
    "--names", "-n",
    default=None,
    type=str,
    help="Comma separated list of set names, e.g. train,test,dev. Unnamed sets are called set1, set2, ...",
)
@click.option(
    "--sizes", "-s",
    default=None,
    type=str,
    help="Comma separated list of set sizes aligned with --names. Integers are unit counts, floating point "
         "values are fractions of the data, * is all remaining units (once). Defaults to *",
)
@click.option(
    "--replace/--no-replace", "-r",
    default=None,
    help="Sample with replacement: a unit may be sampled into multiple sets or multiple times in the same set",
)
@click.option(
    "--shuffle/--no-shuffle", "-x",
    default=None,
    help="Shuffle the order of the output units instead of keeping the input order",
)
@click.option(
    "--seed", "-S",
    default=None,
    type=str,
    help="Random seed (unsigned 64-bit integer) for reproducible sampling",
)
@click.option(
    "--exclude", "-X",
    default=None,
    type=str,
    help="Comma separated list of reference files, one per input file; units found in them are excluded",
)
@click.option(
    "--exclusion-policy",
    default=None,
    type=click.Choice(sorted(policy_registry.list_policies().keys())),
    help="Which rows to exclude: 'any' removes a row matched in any column, 'all' only when every column matched",
)
@click.option(
    "--output", "-o",
    default=None,
    type=str,
    help="Output directory",
)
@click.option(
    "--extension", "-e",
    default=None,
    type=str,
    help="Output file extension (defaults to txt)",
)
@click.option(
    "--encoding",
    default=None,
    type=str,
    help="Encoding of input and output files (defaults to utf-8)",
)
@click.option(
    "--config", "-c",
    default=None,
    type=str,
    help="Path to a YAML configuration file; command line options take precedence",
)
@click.option(
    "--progress/--no-progress",
    default=None,
    help="Show progress bars while reading input",
)
@click.version_option(__version__, prog_name="ssam")
def main(
        files: Tuple[str, ...],
        delimiter: Optional[str],
        names: Optional[str],
        sizes: Optional[str],
        replace: Optional[bool],
        shuffle: Optional[bool],
        seed: Optional[str],
        exclude: Optional[str],
        exclusion_policy: Optional[str],
        output: Optional[str],
        extension: Optional[str],
        encoding: Optional[str],
        config: Optional[str],
        progress: Optional[bool]
) -> None:
    """
    Split one or more input files into multiple sets using random sampling.

    Useful for splitting data into training, test and development sets. Multiple
    input files are considered dependent (e.g. the two sides of a parallel corpus)
    and must contain the same number of units. Without files, input is read from
    standard input.
    """
    try:
        sampler_config = load_config(config) if config else SamplerConfig()
        sampler_config = sampler_config.override(
            files=list(files) or None,
            delimiter=delimiter,
            names=split_list(names) if names is not None else None,
            sizes=(split_list(sizes) or ["*"]) if sizes is not None else None,
            replace=replace,
            shuffle=shuffle,
            seed=parse_seed(seed) if seed is not None else None,
            exclude=split_list(exclude) if exclude is not None else None,
            exclusion_policy=exclusion_policy,
            output=output,
            extension=extension,
            encoding=encoding,
            progress=progress
        )

        sampler = SplitSampler(sampler_config)

        click.echo("Split configuration:", err=True)
        for set_name, info in sampler.get_split_info().items():
            label = "remainder" if info["remainder"] else info["size"]
            click.echo(f"  - {set_name}: {label}", err=True)

        sampler.run_sampling(default_stream=sys.stdout)

        if sampler.exclusion_filter is not None:
            print_report(sampler.exclusion_filter.generate_exclusion_report(), "EXCLUSION SUMMARY")
        print_report(sampler.generate_split_report(), "SPLIT SUMMARY")

    except SamplerError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.exit_code)


if __name__ == '__main__':
    main()
