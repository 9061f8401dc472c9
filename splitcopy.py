import sys
import logging
import argparse

from colorama import Fore, Style, just_fix_windows_console

from coordinator import JobCoordinator
from jobdata import DEFAULT_GRACE_PERIOD, DEFAULT_POOL_SIZE, DISTRIBUTIONS, BATCH_DISTRIBUTION, JobConfig, JobResult
from sconfig import DEFAULT_CONFIG_FILENAME, parse_config_with_defaults
from scplog import install_excepthook, set_console_level


def build_parser():
    parser = argparse.ArgumentParser(description="Copy a limited number of files from one folder into several folders, in batches, on a thread pool")
    parser.add_argument("-s", "--source", type=str, help="Source directory")
    parser.add_argument("-d", "--destination", type=str, help="Comma separated destination directories. Their content is deleted first")
    parser.add_argument("-c", "--count", type=int, help="Number of files to copy")
    parser.add_argument("-b", "--batch-size", type=int, help="Number of files per batch. Must not exceed --count")
    parser.add_argument("-p", "--pool-size", type=int, help=f"Number of copy threads. Default: {DEFAULT_POOL_SIZE}")
    parser.add_argument("-g", "--grace-period", type=float, help=f"Seconds to wait for running batches. Default: {DEFAULT_GRACE_PERIOD:g}")
    parser.add_argument("--distribution", choices=DISTRIBUTIONS, help=f"Restart round-robin for every batch or continue it over the job. Default: {BATCH_DISTRIBUTION}")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG_FILENAME, help=f"INI file with a [copy] section. Default: {DEFAULT_CONFIG_FILENAME}")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while batches run")
    parser.add_argument("-y", "--yes", action="store_true", help="Don't ask before emptying the destination directories")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")

    return parser


def load_config(args) -> JobConfig:
    config_variables = (
        parse_config_with_defaults(
            config_filename=args.config,
            section="copy",
            params=[
                ("source", str, args.source),
                ("destination", str, args.destination),
                ("countcopyfiles", int, args.count),
                ("batchsize", int, args.batch_size),
                ("poolsize", int, args.pool_size),
                ("graceperiod", float, args.grace_period),
                ("distribution", str, args.distribution)]))

    grace_period = config_variables["graceperiod"]
    pool_size = config_variables["poolsize"]
    distribution = config_variables["distribution"]

    return JobConfig(
        source_path=config_variables["source"],
        destination_path=config_variables["destination"],
        count_copy_files=config_variables["countcopyfiles"],
        batch_size=config_variables["batchsize"],
        pool_size=DEFAULT_POOL_SIZE if pool_size is None else pool_size,
        grace_period=DEFAULT_GRACE_PERIOD if grace_period is None else grace_period,
        distribution=BATCH_DISTRIBUTION if distribution is None else distribution.strip().lower())


def print_summary(result: JobResult):
    if result.reason is not None:
        print(f"{Fore.RED}Nothing copied: {result.reason}{Style.RESET_ALL}")
        return

    color = Fore.GREEN if result.ok else Fore.YELLOW

    print(f"{color}Copied {result.copied} of {result.attempted} files in {result.finished}/{result.batches} batches{Style.RESET_ALL}")

    if result.failed:
        print(f"{Fore.RED}{result.failed} file(s) failed to copy{Style.RESET_ALL}")

    if result.pending:
        print(f"{Fore.YELLOW}{result.pending} batch(es) still running when the summary was taken{Style.RESET_ALL}")

    for destination, count in result.destination_counts.items():
        print(f"  {destination}: {count} files ({result.copied_to[destination]} copied by this job)")


def main(argv=None):
    args = build_parser().parse_args(argv)

    just_fix_windows_console()
    install_excepthook()

    if args.verbose:
        set_console_level(logging.DEBUG)

    config = load_config(args)

    if not args.yes and config.destination_candidates():
        ok = input(f"Copying {config.count_copy_files} files from {config.source_path} in batches of {config.batch_size} "
                   f"using {config.pool_size} thread(s).\n"
                   f"Everything in {', '.join(config.destination_candidates())} will be deleted first. OK? (y/n): ")

        if ok.lower() != "y":
            return 0

    result = JobCoordinator(config, progress=args.progress).run()
    print_summary(result)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
