import pytest

from trportfolio.jsonreader import JSONReader, JSONResponse


@pytest.fixture
def responses_dir(tmp_path):
    transactions = tmp_path / "timelineTransactions"
    transactions.mkdir()
    (transactions / "page-1.json").write_bytes(b'{"items": ["first"]}')
    (transactions / "page-2.json").write_bytes(b'{"items": ["second"]}')

    details = tmp_path / "timelineDetailV2"
    details.mkdir()
    (details / "abc.json").write_bytes(b'{"id": "abc"}')
    (details / "page-1.json").write_bytes(b'{"page": true}')
    return tmp_path


def test_reads_pages_in_order(responses_dir):
    reader = JSONReader(responses_dir)
    first = reader.read("timelineTransactions", None)
    second = reader.read("timelineTransactions", {"after": "cursor"})

    assert first == JSONResponse((responses_dir / "timelineTransactions" / "page-1.json").read_bytes())
    assert second.data == (responses_dir / "timelineTransactions" / "page-2.json").read_bytes()


def test_reads_by_id(responses_dir):
    reader = JSONReader(responses_dir)
    response = reader.read("timelineDetailV2", {"id": "abc"})
    assert response.data == (responses_dir / "timelineDetailV2" / "abc.json").read_bytes()


def test_cursors_are_kept_per_data_type(responses_dir):
    reader = JSONReader(responses_dir)
    reader.read("timelineTransactions", {})
    response = reader.read("timelineDetailV2", {})
    assert response.data == (responses_dir / "timelineDetailV2" / "page-1.json").read_bytes()


def test_reading_by_id_does_not_move_cursor(responses_dir):
    reader = JSONReader(responses_dir)
    reader.read("timelineDetailV2", {"id": "abc"})
    response = reader.read("timelineDetailV2", {})
    assert response.data == (responses_dir / "timelineDetailV2" / "page-1.json").read_bytes()


def test_missing_file_raises(responses_dir):
    reader = JSONReader(responses_dir)
    with pytest.raises(FileNotFoundError):
        reader.read("timelineDetailV2", {"id": "missing"})


def test_missing_page_raises_after_last(responses_dir):
    reader = JSONReader(responses_dir)
    reader.read("timelineTransactions")
    reader.read("timelineTransactions")
    with pytest.raises(FileNotFoundError):
        reader.read("timelineTransactions")