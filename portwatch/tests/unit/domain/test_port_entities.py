from portwatch.domain.entities import UNINITIALIZED, PortRecord, PortSnapshot


def test_records_with_same_device_but_other_description_differ():
    assert PortRecord("COM3", "X") != PortRecord("COM3", "Y")
    assert len({PortRecord("COM3", "X"), PortRecord("COM3", "Y")}) == 2


def test_record_key_and_label():
    record = PortRecord("COM3", "USB Serial")

    assert record.key == "COM3:USB Serial"
    assert record.label == "COM3 - USB Serial"
    assert PortRecord("COM5").label == "COM5"


def test_snapshot_iterates_in_lexicographic_order_and_collapses_duplicates():
    snapshot = PortSnapshot.of(
        [
            PortRecord("COM4", "Bluetooth"),
            PortRecord("COM3", "USB Serial"),
            PortRecord("COM4", "Bluetooth"),
        ]
    )

    assert len(snapshot) == 2
    assert snapshot.devices() == ["COM3", "COM4"]
    assert list(snapshot) == list(snapshot.records())
    assert PortRecord("COM3", "USB Serial") in snapshot


def test_empty_snapshot_is_not_the_uninitialized_marker():
    empty = PortSnapshot()

    assert not empty
    assert empty is not UNINITIALIZED
    assert empty != UNINITIALIZED
    assert repr(UNINITIALIZED) == "UNINITIALIZED"
