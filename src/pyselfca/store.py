"""
This module persists PEM bundles as sibling files on disk.

A bundle named <name> is stored as <name>.cert, <name>.key and, when a public
key is available, <name>.pub.key.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .constants import CERT_SUFFIX, PRIVATE_KEY_SUFFIX, PUBLIC_KEY_SUFFIX
from .exceptions import MalformedPemError, NotFoundError
from .pem import PemBundle


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FilePemStore:
    """
    Reads and writes PEM text files.
    """

    def write(self, path: PathLike, content: str) -> None:
        """Writes content to path, replacing any existing file."""
        Path(path).write_text(content, encoding="ascii")
        logger.debug("Wrote %s", path)

    def read(self, path: PathLike) -> str:
        """
        Reads the text stored at path.

        Raises:
            NotFoundError: If nothing exists at path.
            UnicodeDecodeError: If the file is not ASCII text.
        """
        try:
            return Path(path).read_text(encoding="ascii")
        except FileNotFoundError as e:
            raise NotFoundError(str(path)) from e


def bundle_paths(folder: PathLike, name: str):
    """Returns the (certificate, private key, public key) paths for name in folder."""
    folder = Path(folder)
    return (
        folder / f"{name}{CERT_SUFFIX}",
        folder / f"{name}{PRIVATE_KEY_SUFFIX}",
        folder / f"{name}{PUBLIC_KEY_SUFFIX}",
    )


def write_bundle(
    bundle: PemBundle, folder: PathLike, name: str, store: Optional[FilePemStore] = None
):
    """
    Writes bundle into folder as the <name>.* sibling files.

    Returns:
        The list of paths written.
    """
    store = store or FilePemStore()
    cert_path, key_path, public_key_path = bundle_paths(folder, name)

    store.write(cert_path, bundle.certificate)
    store.write(key_path, bundle.private_key)
    written = [cert_path, key_path]
    if bundle.public_key:
        store.write(public_key_path, bundle.public_key)
        written.append(public_key_path)

    logger.info("Persisted %s to %s (%d files)", name, folder, len(written))
    return written


def read_bundle(
    cert_path: PathLike,
    key_path: PathLike,
    public_key_path: Optional[PathLike] = None,
    store: Optional[FilePemStore] = None,
) -> PemBundle:
    """
    Reads a PEM bundle from explicit file paths.

    Raises:
        NotFoundError: If any requested file is missing.
        MalformedPemError: If a file is not ASCII text.
    """
    store = store or FilePemStore()
    public_key = _read_pem(store, public_key_path, "public key") if public_key_path else None
    return PemBundle(
        certificate=_read_pem(store, cert_path, "certificate"),
        private_key=_read_pem(store, key_path, "private key"),
        public_key=public_key,
    )


def _read_pem(store: FilePemStore, path: PathLike, kind: str) -> str:
    try:
        return store.read(path)
    except UnicodeDecodeError as e:
        # DER or otherwise binary content
        raise MalformedPemError(kind, f"{path} is not PEM text") from e
