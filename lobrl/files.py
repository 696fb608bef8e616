"""Discovery of paired market-depth and time-and-sales data files."""

from __future__ import annotations

import glob
import os


def glob_paths(pattern: str) -> list[str]:
    """Return paths matching ``pattern`` (with ``~`` expansion), sorted."""
    return sorted(glob.glob(os.path.expanduser(pattern)))


def check_exists(path: str) -> bool:
    return os.path.exists(path)


def _check_symbol_dirs(md_dir: str, tas_dir: str, symbol: str) -> tuple[str, str]:
    md_s_dir = f"{md_dir}/{symbol}"
    tas_s_dir = f"{tas_dir}/{symbol}"
    if not check_exists(md_s_dir):
        raise FileNotFoundError(f"No such directory: {md_s_dir}")
    if not check_exists(tas_s_dir):
        raise FileNotFoundError(f"No such directory: {tas_s_dir}")
    return md_s_dir, tas_s_dir


def get_file_sample(
    md_dir: str, tas_dir: str, symbols: list[str]
) -> list[tuple[str, str, str]]:
    """Pair every ``md_`` file of each symbol with its ``tas_`` counterpart.

    Pairs whose time-and-sales file does not exist are left out.
    """
    all_files: list[tuple[str, str, str]] = []
    for symbol in symbols:
        md_s_dir, _ = _check_symbol_dirs(md_dir, tas_dir, symbol)

        for md_file in glob_paths(md_s_dir + "/*.csv"):
            tas_file = tas_dir + md_file[len(md_dir):]

            loc = md_file.find("md_")
            if loc == -1:
                raise ValueError(f"Unexpected file name: {md_file}")
            tas_file = tas_file[: loc + 1] + "tas" + tas_file[loc + 3:]

            if os.path.exists(tas_file):
                all_files.append((symbol, md_file, tas_file))

    return all_files


def get_sample_window(
    md_dir: str, tas_dir: str, symbol: str, search_patterns: list[str]
) -> list[tuple[str, str, str]]:
    """Return the first matching file pair for each search pattern."""
    md_s_dir, tas_s_dir = _check_symbol_dirs(md_dir, tas_dir, symbol)

    samples: list[tuple[str, str, str]] = []
    for pattern in search_patterns:
        md_files = glob_paths(f"{md_s_dir}/*{pattern}*.csv")
        tas_files = glob_paths(f"{tas_s_dir}/*{pattern}*.csv")

        if len(md_files) != len(tas_files) or not md_files:
            raise ValueError("No matching files for MD and TAS.")
        samples.append((symbol, md_files[0], tas_files[0]))

    return samples