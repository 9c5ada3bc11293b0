"""
Unit tests for snapshot serialization and version checks.
"""
import json
from datetime import datetime, timezone

import pytest

from memoport_server.models.memo import Location
from memoport_server.models.snapshot import AttachmentRef, Record, RelationRef, Snapshot, SNAPSHOT_VERSION
from memoport_server.services.snapshot import (
    SnapshotDecodeError,
    UnsupportedSnapshotVersionError,
    check_version,
    decode_snapshot,
    encode_snapshot,
)


def _snapshot() -> Snapshot:
    return Snapshot(
        version=SNAPSHOT_VERSION,
        exported_at=datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc),
        records=[
            Record(
                uid="a1",
                content="first #tag",
                visibility="PUBLIC",
                pinned=True,
                created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
                display_time=datetime(2024, 1, 1, 9, tzinfo=timezone.utc),
                tags=["tag"],
                location=Location(placeholder="Paris", latitude=48.8566, longitude=2.3522),
                attachments=[AttachmentRef(uid="att1", filename="a.png", type="image/png", size=42)],
                relations=[RelationRef(related_uid="b2", type="REFERENCE")],
            ),
            Record(
                uid="b2",
                content="second",
                created_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
                updated_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
            ),
        ],
    )


class TestEncode:

    def test_round_trip(self):
        snapshot = _snapshot()
        assert decode_snapshot(encode_snapshot(snapshot)) == snapshot

    def test_pretty_printed_utf8(self):
        data = encode_snapshot(Snapshot(version=SNAPSHOT_VERSION, records=[Record(uid="u", content="naïve ✓")]))
        text = data.decode("utf-8")
        assert '\n  "version": "1.0"' in text
        assert "naïve ✓" in text

    def test_absent_optional_fields_are_omitted(self):
        parsed = json.loads(encode_snapshot(_snapshot()))
        second = parsed["records"][1]
        assert "location" not in second
        assert "display_time" not in second
        first = parsed["records"][0]
        assert first["location"]["placeholder"] == "Paris"
        assert first["relations"] == [{"related_uid": "b2", "type": "REFERENCE"}]


class TestDecode:

    def test_accepts_memos_alias(self):
        data = json.dumps({
            "version": "1.0",
            "exported_at": "2024-03-01T12:00:00Z",
            "memos": [{
                "uid": "x1",
                "content": "hi",
                "visibility": "PRIVATE",
                "relations": [{"related_memo_uid": "x2", "type": "COMMENT"}],
            }],
        }).encode()
        snapshot = decode_snapshot(data)
        assert [r.uid for r in snapshot.records] == ["x1"]
        assert snapshot.records[0].relations[0].related_uid == "x2"

    def test_unknown_visibility_survives_decode(self):
        data = b'{"version": "1.0", "records": [{"uid": "v", "visibility": "SECRET"}]}'
        assert decode_snapshot(data).records[0].visibility == "SECRET"

    @pytest.mark.parametrize("data", [
        b"not json",
        b"[]",
        b'{"version": "1.0", "records": "nope"}',
        b'{"version": "1.0", "records": [{"uid": "a", "pinned": "maybe"}]}',
        b"\xff\xfe",
    ])
    def test_malformed_data(self, data):
        with pytest.raises(SnapshotDecodeError):
            decode_snapshot(data)


class TestVersion:

    def test_supported_version(self):
        check_version(_snapshot())

    @pytest.mark.parametrize("version", ["2.0", "", None])
    def test_unsupported_version(self, version):
        snapshot = Snapshot(version=version)
        with pytest.raises(UnsupportedSnapshotVersionError):
            check_version(snapshot)

    def test_missing_version_in_data(self):
        snapshot = decode_snapshot(b'{"records": []}')
        with pytest.raises(UnsupportedSnapshotVersionError):
            check_version(snapshot)
