"""
Magnetic Model Files.

A named magnetic model is stored as two files in one directory:

- `<name>.wmm`: a text metadata file. The first line identifies the
  format (WMMF-1 or WMMF-2); each following line is a `Key Value` pair.
  Blank lines and lines starting with '#' are ignored.
- `<name>.wmm.cof`: the binary coefficient file. It starts with the same
  8-character ID as the metadata, followed by NumModels + 1 +
  NumConstants coefficient sets. Each set is two int32 values N (degree)
  and M (order), then the cosine coefficients C in column-major order
  (m = 0..M, n = m..N) and the sine coefficients S (m = 1..M, n = m..N),
  all float64.

Set i < NumModels gives the Gauss coefficients at Epoch + i * DeltaEpoch,
set NumModels gives their rate of change after the last epoch, and the
remaining sets are constant contributions. Coefficients are in nT (nT per
year for the rate set).

Both readers fail with `ModelFormatError` on malformed content; a missing
file is reported by the caller as `ModelNotFoundError` before either
reader runs.

References
----------
- GeographicLib magnetic model file format:
  https://geographiclib.sourceforge.io/C++/doc/magnetic.html
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from common.constants import GeodeticConstants
from common.errors import ModelFormatError
from common.logging_config import get_logger

logger = get_logger(__name__)

METADATA_SUFFIX = ".wmm"
COEFFICIENT_SUFFIX = ".wmm.cof"
FORMAT_VERSIONS = ("WMMF-1", "WMMF-2")
ID_LENGTH = 8

_INT = np.dtype("<i4")
_DOUBLE = np.dtype("<f8")


@dataclass(frozen=True)
class ModelMetadata:
    """Contents of a `.wmm` metadata file.

    Attributes
    ----------
    name, description, release_date : str
        Descriptive fields.
    radius : float
        Reference radius a of the harmonic expansion, meters.
    num_models : int
        Number of epochs with tabulated coefficients.
    num_constants : int
        Number of constant coefficient sets.
    epoch, delta_epoch : float
        Fractional year of the first set and spacing between sets.
    min_time, max_time : float
        Validity window in fractional years, [min_time, max_time).
    min_height, max_height : float
        Validity window in meters above the ellipsoid.
    normalization : str
        "schmidt" (semi-normalized) or "full".
    model_id : str
        8-character identifier shared with the coefficient file.
    version : str
        Format identifier from the first line.
    """
    name: str
    description: str = "NONE"
    release_date: str = "UNKNOWN"
    radius: float = GeodeticConstants.WGS84_EQUATORIAL_RADIUS.value
    num_models: int = 1
    num_constants: int = 0
    epoch: float = 0.0
    delta_epoch: float = 1.0
    min_time: float = -np.inf
    max_time: float = np.inf
    min_height: float = -np.inf
    max_height: float = np.inf
    normalization: str = "schmidt"
    model_id: str = "UNKNOWN0"
    version: str = FORMAT_VERSIONS[0]


@dataclass(frozen=True)
class CoefficientSet:
    """One set of Gauss coefficients.

    `g[n, m]` and `h[n, m]` hold the cosine and sine coefficients of
    degree n and order m; entries with m > n or m > order are zero.
    """
    degree: int
    order: int
    g: NDArray[np.float64]
    h: NDArray[np.float64]

    def padded(self, degree: int) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """(g, h) zero-padded to `degree`."""
        g = np.zeros((degree + 1, degree + 1))
        h = np.zeros((degree + 1, degree + 1))
        size = self.degree + 1
        g[:size, :size] = self.g
        h[:size, :size] = self.h
        return g, h


_KEYS = {
    "Name": ("name", str),
    "Description": ("description", str),
    "ReleaseDate": ("release_date", str),
    "Radius": ("radius", float),
    "NumModels": ("num_models", int),
    "NumConstants": ("num_constants", int),
    "Epoch": ("epoch", float),
    "DeltaEpoch": ("delta_epoch", float),
    "MinTime": ("min_time", float),
    "MaxTime": ("max_time", float),
    "MinHeight": ("min_height", float),
    "MaxHeight": ("max_height", float),
    "Normalization": ("normalization", str.lower),
    "ID": ("model_id", str),
}


def read_metadata(path: Union[str, Path]) -> ModelMetadata:
    """Parse a `.wmm` metadata file.

    Raises
    ------
    ModelFormatError
        If the format line, a value, the normalization, the byte order or
        the ID is invalid.
    """
    path = Path(path)
    lines = path.read_text().splitlines()
    if not lines or lines[0].strip()[:6] not in FORMAT_VERSIONS:
        raise ModelFormatError(path, "missing WMMF format line")

    fields = {"version": lines[0].strip()[:6], "name": path.name[:-len(METADATA_SUFFIX)]}
    for line in lines[1:]:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition(" ")
        value = value.strip()
        if key == "ByteOrder":
            if value.lower() not in ("0", "little"):
                raise ModelFormatError(path, f"unsupported byte order {value!r}")
            continue
        if key not in _KEYS:
            continue
        attr, convert = _KEYS[key]
        try:
            fields[attr] = convert(value)
        except ValueError as e:
            raise ModelFormatError(path, f"bad value for {key}: {value!r}") from e

    metadata = ModelMetadata(**fields)
    if metadata.normalization not in ("schmidt", "full"):
        raise ModelFormatError(path, f"unknown normalization {metadata.normalization!r}")
    if len(metadata.model_id) != ID_LENGTH:
        raise ModelFormatError(path, f"ID must be {ID_LENGTH} characters")
    if metadata.num_models < 1 or metadata.num_constants < 0:
        raise ModelFormatError(path, "NumModels must be positive and NumConstants non-negative")
    if not metadata.delta_epoch > 0:
        raise ModelFormatError(path, "DeltaEpoch must be positive")
    if not metadata.radius > 0:
        raise ModelFormatError(path, "Radius must be positive")
    return metadata


def _coefficient_counts(degree: int, order: int) -> Tuple[int, int]:
    csize = (order + 1) * (2 * degree - order + 2) // 2
    return csize, csize - (degree + 1)


def read_coefficients(path: Union[str, Path], metadata: ModelMetadata) -> List[CoefficientSet]:
    """Read the coefficient sets of a `.wmm.cof` file.

    Raises
    ------
    ModelFormatError
        On an ID mismatch, a bad degree/order pair, truncation or
        trailing data.
    """
    path = Path(path)
    raw = path.read_bytes()
    if raw[:ID_LENGTH].decode("ascii", errors="replace") != metadata.model_id:
        raise ModelFormatError(path, "ID does not match the metadata")

    offset = ID_LENGTH
    sets = []
    for _ in range(metadata.num_models + 1 + metadata.num_constants):
        if offset + 2 * _INT.itemsize > len(raw):
            raise ModelFormatError(path, "truncated coefficient header")
        degree, order = (int(v) for v in np.frombuffer(raw, _INT, 2, offset))
        offset += 2 * _INT.itemsize
        if not (degree >= -1 and (0 <= order <= degree or order == degree == -1)):
            raise ModelFormatError(path, f"bad degree/order {degree}/{order}")
        csize, ssize = _coefficient_counts(degree, order) if degree >= 0 else (0, 0)
        if offset + (csize + ssize) * _DOUBLE.itemsize > len(raw):
            raise ModelFormatError(path, "truncated coefficient data")
        cvals = _read_doubles(raw, csize, offset)
        offset += csize * _DOUBLE.itemsize
        svals = _read_doubles(raw, ssize, offset)
        offset += ssize * _DOUBLE.itemsize
        sets.append(_unpack(degree, order, cvals, svals))

    if offset != len(raw):
        raise ModelFormatError(path, "extra data after the last coefficient set")
    return sets


def _read_doubles(raw: bytes, count: int, offset: int) -> NDArray:
    if count == 0:
        return np.empty(0)
    return np.frombuffer(raw, _DOUBLE, count, offset)


def _unpack(degree: int, order: int, cvals: NDArray, svals: NDArray) -> CoefficientSet:
    size = max(degree, 0) + 1
    g = np.zeros((size, size))
    h = np.zeros((size, size))
    ic = is_ = 0
    for m in range(order + 1):
        count = degree - m + 1
        g[m:degree + 1, m] = cvals[ic:ic + count]
        ic += count
        if m > 0:
            h[m:degree + 1, m] = svals[is_:is_ + count]
            is_ += count
    return CoefficientSet(max(degree, 0), max(order, 0), g, h)


def write_model(
    directory: Union[str, Path],
    metadata: ModelMetadata,
    sets: Sequence[CoefficientSet]
) -> Tuple[Path, Path]:
    """Write a model in the layout read by `read_metadata`/`read_coefficients`.

    Returns
    -------
    Tuple[Path, Path]
        Paths of the metadata and coefficient files.
    """
    expected = metadata.num_models + 1 + metadata.num_constants
    if len(sets) != expected:
        raise ValueError(f"expected {expected} coefficient sets, got {len(sets)}")
    if len(metadata.model_id) != ID_LENGTH:
        raise ValueError(f"model ID must be {ID_LENGTH} characters")

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    meta_path = directory / f"{metadata.name}{METADATA_SUFFIX}"
    cof_path = directory / f"{metadata.name}{COEFFICIENT_SUFFIX}"

    lines = [
        metadata.version,
        f"Name {metadata.name}",
        f"Description {metadata.description}",
        f"ReleaseDate {metadata.release_date}",
        f"Radius {metadata.radius!r}",
        f"NumModels {metadata.num_models}",
        f"NumConstants {metadata.num_constants}",
        f"Epoch {metadata.epoch!r}",
        f"DeltaEpoch {metadata.delta_epoch!r}",
        f"MinTime {metadata.min_time!r}",
        f"MaxTime {metadata.max_time!r}",
        f"MinHeight {metadata.min_height!r}",
        f"MaxHeight {metadata.max_height!r}",
        f"Normalization {metadata.normalization}",
        "ByteOrder 0",
        f"ID {metadata.model_id}",
    ]
    meta_path.write_text("\n".join(lines) + "\n")

    chunks = [metadata.model_id.encode("ascii")]
    for cs in sets:
        chunks.append(np.array([cs.degree, cs.order], dtype=_INT).tobytes())
        cvals = [cs.g[m:cs.degree + 1, m] for m in range(cs.order + 1)]
        svals = [cs.h[m:cs.degree + 1, m] for m in range(1, cs.order + 1)]
        chunks.append(np.concatenate(cvals).astype(_DOUBLE).tobytes())
        if svals:
            chunks.append(np.concatenate(svals).astype(_DOUBLE).tobytes())
    cof_path.write_bytes(b"".join(chunks))
    logger.debug("Wrote magnetic model %s to %s", metadata.name, directory)
    return meta_path, cof_path
