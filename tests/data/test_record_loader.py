"""
Test record matrix loading.

Tests for reading CSV sources into rectangular record matrices.
"""

# Standard library imports
import io
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from lineplot.data import load_record_matrix
from lineplot.errors import LoadError
from lineplot.logging.error_codes import ErrorCode


class TestLoadRecordMatrix:
    """Test load_record_matrix."""

    @pytest.mark.unit
    def test_loads_rows_as_text(self, write_csv, example_rows):
        """Every cell stays a string, rows keep their order."""
        path = write_csv(example_rows)
        assert load_record_matrix(path) == example_rows

    @pytest.mark.unit
    def test_accepts_str_path(self, write_csv, example_rows):
        path = write_csv(example_rows)
        assert load_record_matrix(str(path)) == example_rows

    @pytest.mark.unit
    def test_skips_space_after_delimiter(self, write_csv):
        """Files written as '1, 100, 200' give clean cells."""
        path = write_csv("X, Series 1, Series 2\n1, 100, 200\n")
        assert load_record_matrix(path) == [["X", "Series 1", "Series 2"], ["1", "100", "200"]]

    @pytest.mark.unit
    def test_quoted_fields(self, write_csv):
        path = write_csv('date,"load, avg"\n"2024-01-01","1,5"\n')
        assert load_record_matrix(path) == [["date", "load, avg"], ["2024-01-01", "1,5"]]

    @pytest.mark.unit
    def test_blank_lines_ignored(self, write_csv):
        path = write_csv("100\n\n210\n\n89\n")
        assert load_record_matrix(path) == [["100"], ["210"], ["89"]]

    @pytest.mark.unit
    def test_reads_open_stream(self):
        """A stream source is read but left open for the caller."""
        stream = io.StringIO("a,b\n1,2\n")
        assert load_record_matrix(stream) == [["a", "b"], ["1", "2"]]
        assert not stream.closed

    @pytest.mark.unit
    def test_utf8_bom_is_stripped(self, tmp_path):
        path = tmp_path / 'bom.csv'
        path.write_bytes("\ufeffX,S1\n1,2\n".encode("utf-8"))
        assert load_record_matrix(path)[0] == ["X", "S1"]

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            load_record_matrix(tmp_path / 'missing.csv')
        assert exc_info.value.error_code == ErrorCode.DATA_LOAD_FAILED
        assert 'missing.csv' in str(exc_info.value)

    @pytest.mark.unit
    def test_empty_file(self, write_csv):
        path = write_csv("")
        with pytest.raises(LoadError) as exc_info:
            load_record_matrix(path)
        assert exc_info.value.error_code == ErrorCode.DATA_EMPTY

    @pytest.mark.unit
    def test_ragged_rows_fail_fast(self, write_csv):
        path = write_csv("a,b,c\n1,2\n")
        with pytest.raises(LoadError) as exc_info:
            load_record_matrix(path)
        assert exc_info.value.error_code == ErrorCode.DATA_NOT_RECTANGULAR
        assert 'Record 2' in str(exc_info.value)

    @pytest.mark.unit
    def test_oversized_field_is_parse_error(self):
        """A field beyond the csv module's size limit is reported as malformed."""
        stream = io.StringIO("a," + "9" * 200_000 + "\n")
        with pytest.raises(LoadError) as exc_info:
            load_record_matrix(stream)
        assert exc_info.value.error_code == ErrorCode.DATA_PARSE_ERROR

    @pytest.mark.unit
    def test_binary_garbage(self, tmp_path):
        path = tmp_path / 'image.csv'
        path.write_bytes(b'\x89PNG\r\n\x1a\n\xff\xfe\x00')
        with pytest.raises(LoadError) as exc_info:
            load_record_matrix(path)
        assert exc_info.value.error_code == ErrorCode.DATA_PARSE_ERROR
