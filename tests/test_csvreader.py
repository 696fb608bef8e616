import pytest

from lobrl.csvreader import CSVReader, parse_row


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "rows.csv"
    path.write_text("a,b,c\n1,2,3\n4,5,6")
    return path


def test_parse_row_splits_on_commas():
    assert parse_row("a,b,,c") == ["a", "b", "", "c"]
    assert parse_row("") == [""]
    assert parse_row("single") == ["single"]


def test_next_row_reads_in_order(csv_file):
    with CSVReader(str(csv_file)) as reader:
        assert reader.next_row() == ["a", "b", "c"]
        assert reader.next_row() == ["1", "2", "3"]
        assert reader.has_data()
        assert reader.next_row() == ["4", "5", "6"]
        assert not reader.has_data()


def test_peek_does_not_advance(csv_file):
    with CSVReader(str(csv_file)) as reader:
        reader.next_row()
        assert reader.peek() == ["1", "2", "3"]
        assert reader.peek() == ["1", "2", "3"]
        assert reader.next_row() == ["1", "2", "3"]


def test_skip_moves_past_lines(csv_file):
    with CSVReader(str(csv_file)) as reader:
        reader.skip(2)
        assert reader.next_row() == ["4", "5", "6"]


def test_skip_past_end_stops(csv_file):
    with CSVReader(str(csv_file)) as reader:
        reader.skip(10)
        assert not reader.has_data()


def test_trailing_newline_gives_empty_last_row(tmp_path):
    path = tmp_path / "trailing.csv"
    path.write_text("x,y\n")
    with CSVReader(str(path)) as reader:
        assert reader.next_row() == ["x", "y"]
        assert reader.has_data()
        assert reader.next_row() == [""]
        assert not reader.has_data()


def test_context_manager_closes(csv_file):
    reader = CSVReader(str(csv_file))
    with reader:
        assert reader.is_open()
    assert not reader.is_open()
    assert not reader.has_data()


def test_reopen_starts_from_beginning(csv_file, tmp_path):
    other = tmp_path / "other.csv"
    other.write_text("p,q\n")
    reader = CSVReader(str(csv_file))
    reader.next_row()
    reader.open(str(other))
    assert reader.next_row() == ["p", "q"]
    reader.close()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CSVReader(str(tmp_path / "absent.csv"))


def test_reading_without_file_raises():
    reader = CSVReader()
    assert not reader.is_open()
    with pytest.raises(ValueError):
        reader.next_row()