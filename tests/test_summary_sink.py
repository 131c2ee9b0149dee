"""
Tests for RootSummarySink.

Writes real ROOT files with uproot and reads them back.
"""

import pytest
import uproot

from domain.output import OutputRecord
from services.output.summary_sink import RootSummarySink


def make_record(event_id, channel_integrals=(), volume_edep=None, n_channels=None):
    return OutputRecord(
        event_id=event_id,
        total_primary_energy=float(event_id) + 0.5,
        volume_edep=volume_edep or {},
        channel_integrals=tuple(channel_integrals),
        n_channels=len(channel_integrals) if n_channels is None else n_channels,
        all_channel_integral=float(sum(channel_integrals)),
    )


class TestRootSummarySink:
    """Tests for RootSummarySink."""

    def test_branch_types_include_volume_columns(self, tmp_path):
        """Test the declared schema."""
        sink = RootSummarySink(str(tmp_path / "out.root"), ["LArVol", "volPanel"])

        assert list(sink.branch_types()) == [
            "event_id",
            "total_primary_energy",
            "n_channels",
            "all_channel_integral",
            "channel_integrals",
            "edep_LArVol",
            "edep_volPanel",
        ]

    def test_write_and_read_back(self, tmp_path):
        """Test a round trip through a ROOT file."""
        output_path = str(tmp_path / "out.root")
        records = [
            make_record(0, [6.0, 6.0, 6.0], {"LArVol": 0.42}),
            make_record(1, [], {"LArVol": 0.0}),
            make_record(2, [1.0, 0.0, 0.0, 0.0, 0.0, 2.0], {"LArVol": 3.0}, n_channels=5),
        ]

        with RootSummarySink(output_path, ["LArVol"]) as sink:
            for record in records:
                sink.append(record)
            assert sink.count_written() == 3

        with uproot.open(output_path) as root_file:
            tree = root_file["EdepInfo"]
            assert tree.num_entries == 3
            assert tree.title == "Flattened Energy Deposition Information"
            assert tree["event_id"].array(library="np").tolist() == [0, 1, 2]
            assert tree["n_channels"].array(library="np").tolist() == [3, 0, 5]
            assert tree["edep_LArVol"].array(library="np").tolist() == [0.42, 0.0, 3.0]
            assert tree["all_channel_integral"].array(library="np").tolist() == [18.0, 0.0, 3.0]
            assert tree["channel_integrals"].array(library="ak").to_list() == [
                [6.0, 6.0, 6.0],
                [],
                [1.0, 0.0, 0.0, 0.0, 0.0, 2.0],
            ]

    def test_no_volume_columns_when_filter_empty(self, tmp_path):
        """Test that an empty volume list writes only the fixed columns."""
        output_path = str(tmp_path / "out.root")

        with RootSummarySink(output_path, []) as sink:
            sink.append(make_record(0))

        with uproot.open(output_path) as root_file:
            branch_names = root_file["EdepInfo"].keys()
            assert not any(name.startswith("edep_") for name in branch_names)
            assert "total_primary_energy" in branch_names

    def test_basket_flushing(self, tmp_path):
        """Test that full baskets are written before close."""
        output_path = str(tmp_path / "out.root")
        sink = RootSummarySink(output_path, [], basket_size=2)
        sink.open()

        for event_id in range(5):
            sink.append(make_record(event_id, [1.0]))

        assert sink.tree_entries == 4
        assert sink.count_written() == 5
        sink.close()

        with uproot.open(output_path) as root_file:
            assert root_file["EdepInfo"].num_entries == 5

    def test_custom_tree_name_and_prefix(self, tmp_path):
        """Test configured tree name and volume prefix."""
        output_path = str(tmp_path / "out.root")

        with RootSummarySink(
            output_path, ["LArVol"], tree_name="Flat", volume_prefix="E_"
        ) as sink:
            sink.append(make_record(0, volume_edep={"LArVol": 1.0}))

        with uproot.open(output_path) as root_file:
            assert root_file["Flat"]["E_LArVol"].array(library="np").tolist() == [1.0]

    def test_out_of_order_append_fails(self, tmp_path):
        """Test that records must arrive in index order."""
        with RootSummarySink(str(tmp_path / "out.root"), []) as sink:
            sink.append(make_record(0))
            with pytest.raises(ValueError, match="expected event_id 1"):
                sink.append(make_record(2))

    def test_append_before_open_fails(self, tmp_path):
        """Test that appending to an unopened sink raises."""
        sink = RootSummarySink(str(tmp_path / "out.root"), [])
        with pytest.raises(RuntimeError, match="not open"):
            sink.append(make_record(0))

    def test_uncreatable_output_fails(self, tmp_path):
        """Test that an output path naming a directory raises OSError."""
        output_dir = tmp_path / "outdir"
        output_dir.mkdir()
        sink = RootSummarySink(str(output_dir), [])

        with pytest.raises(OSError, match="Cannot create output file"):
            sink.open()

        assert sink.output_created is False
        assert output_dir.is_dir()

    def test_output_created_after_open(self, tmp_path):
        """Test that output_created is set only once the file exists."""
        sink = RootSummarySink(str(tmp_path / "out.root"), [])
        assert sink.output_created is False

        sink.open()
        sink.close()

        assert sink.output_created is True
        assert (tmp_path / "out.root").is_file()

    def test_invalid_basket_size_fails(self, tmp_path):
        """Test that a non-positive basket size raises ValueError."""
        with pytest.raises(ValueError, match="basket_size must be positive"):
            RootSummarySink(str(tmp_path / "out.root"), [], basket_size=0)

    def test_close_twice_is_harmless(self, tmp_path):
        """Test that closing an already closed sink does nothing."""
        sink = RootSummarySink(str(tmp_path / "out.root"), [])
        sink.open()
        sink.close()
        sink.close()
        assert sink.tree_entries is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
