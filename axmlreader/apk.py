import zipfile
from os import PathLike
from typing import BinaryIO, Union

from loguru import logger

from .errors import ManifestNotFoundError

MANIFEST_NAME = "AndroidManifest.xml"


def read_manifest(apk: Union[str, PathLike, BinaryIO]) -> bytes:
    """
    Return the raw bytes of the binary AndroidManifest.xml of an APK.

    :param apk: path or binary file object of the package (a zip archive)
    :raises ManifestNotFoundError: if the archive has no such entry
    :raises zipfile.BadZipFile: if `apk` is not a zip archive
    """
    with zipfile.ZipFile(apk, 'r') as zf:
        try:
            info = zf.getinfo(MANIFEST_NAME)
        except KeyError:
            raise ManifestNotFoundError(
                "No {} in the archive".format(MANIFEST_NAME)
            ) from None
        logger.debug(
            "{}: {} bytes, compressed {}".format(
                MANIFEST_NAME, info.file_size, info.compress_size
            )
        )
        return zf.read(info)
