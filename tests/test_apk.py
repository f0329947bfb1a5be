import io
import zipfile

import pytest

from axmlreader import ManifestNotFoundError, iter_events, read_manifest


def make_apk(entries):
    data = io.BytesIO()
    with zipfile.ZipFile(data, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return data.getvalue()


def test_read_manifest_from_path(tmp_path, minimal_doc):
    apk = tmp_path / "app.apk"
    apk.write_bytes(
        make_apk({"classes.dex": b"dex\n035\x00", "AndroidManifest.xml": minimal_doc})
    )
    assert read_manifest(str(apk)) == minimal_doc
    assert read_manifest(apk) == minimal_doc


def test_read_manifest_from_file_object(minimal_doc):
    raw = read_manifest(io.BytesIO(make_apk({"AndroidManifest.xml": minimal_doc})))
    assert [e.__class__.__name__ for e in iter_events(raw)] == [
        "StartNamespace",
        "StartElement",
        "EndElement",
        "EndNamespace",
    ]


def test_only_the_top_level_manifest_counts(minimal_doc):
    apk = make_apk({"res/AndroidManifest.xml": minimal_doc})
    with pytest.raises(ManifestNotFoundError):
        read_manifest(io.BytesIO(apk))


def test_not_a_zip():
    with pytest.raises(zipfile.BadZipFile):
        read_manifest(io.BytesIO(b"not a zip file"))
