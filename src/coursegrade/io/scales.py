"""Read and write grading scales.

A scale file is a simple CSV with no headers. The first column contains the
letter grade, and the second contains the threshold as a percentage. The
order of the rows matters!

"""

from collections.abc import Mapping
from collections import OrderedDict
from typing import Union
import pathlib as _pathlib

from ..scales import validate_scale


def write(path: Union[str, _pathlib.Path], scale: Mapping):
    """Writes a grading scale to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale will be written.
    scale : Mapping
        A mapping from letter grades to their thresholds.

    Raises
    ------
    ValueError
        If the scale is not valid. See :func:`coursegrade.scales.validate_scale`.

    """
    validate_scale(scale)
    path = _pathlib.Path(path)

    with path.open("w") as fileobj:
        for letter, threshold in scale.items():
            fileobj.write(f"{letter},{threshold}\n")


def read(path: Union[str, _pathlib.Path]) -> OrderedDict:
    """Reads a grading scale from the file.

    Blank lines are ignored.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale is stored.

    Returns
    -------
    OrderedDict
        A mapping from letter grades to their thresholds.

    Raises
    ------
    ValueError
        If a line is malformed, or the scale is not valid.

    """
    path = _pathlib.Path(path)

    with path.open() as fileobj:
        lines = [line for line in fileobj.readlines() if line.strip()]

    def parse_line(line):
        try:
            letter, threshold = line.split(",")
        except ValueError:
            raise ValueError(f"Malformed line in scale file: {line!r}") from None
        return (letter.strip(), float(threshold))

    scale = OrderedDict(map(parse_line, lines))
    validate_scale(scale)
    return scale
