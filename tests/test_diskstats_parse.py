#  vim:ts=4:sts=4:sw=4:et
#
#  License: Apache 2.0, see accompanying LICENSE file
#

import pytest  # type: ignore[import]

from diskstats_parse import DiskStatsParse, find_device

DISKSTATS = """   7       0 loop0 58 0 2138 17 0 0 0 0 0 36 17 0 0 0 0
   8       0 sda 181740 10296 9126818 95896 255372 220427 10622210 466808 0 204108 562704 0 0 0 0 0 0
   8       1 sda1 181600 10296 9119610 95844 246556 220427 10622210 458044 0 200956 553888 0 0 0 0 0 0
 259       0 nvme0n1 8 0 264 2 0 0 0 0 0 4 2 0 0 0 0
"""


@pytest.fixture(name="diskstats")
def fixture_diskstats(tmp_path):
    path = tmp_path / 'diskstats'
    path.write_text(DISKSTATS)
    return str(path)


def test_find_device_matches_whole_name():
    fields = find_device(DISKSTATS.splitlines(), 'sda')
    assert fields[:4] == ['8', '0', 'sda', '181740']
    assert find_device(DISKSTATS.splitlines(), 'sda1')[2] == 'sda1'
    assert find_device(DISKSTATS.splitlines(), 'sdb') is None


def test_one_field_per_line(diskstats, capsys):
    DiskStatsParse().main(['--device', 'nvme0n1', '--file', diskstats])
    assert capsys.readouterr().out.split('\n') == \
        ['259', '0', 'nvme0n1', '8', '0', '264', '2', '0', '0', '0', '0', '0', '4', '2', '0', '0', '0', '0', '']


def test_named(diskstats, capsys):
    DiskStatsParse().main(['-d', 'sda', '-f', diskstats, '--named'])
    output = capsys.readouterr().out
    assert output.startswith('major:8 minor:0 device:sda reads_completed:181740 reads_merged:10296 ')
    assert 'weighted_io_time_ms:562704' in output
    assert output.endswith(' flush_time_ms:0\n')


def test_missing_device(diskstats, capsys):
    with pytest.raises(SystemExit) as excinfo:
        DiskStatsParse().main(['-d', 'sdz', '-f', diskstats])
    assert excinfo.value.code == 3
    assert capsys.readouterr().out == \
        'UNKNOWN: Failed to parse {0}: Could not find stats for device sdz\n'.format(diskstats)


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        DiskStatsParse().main(['-d', 'sda', '-f', str(tmp_path / 'missing')])
    assert excinfo.value.code == 3
    assert capsys.readouterr().out.startswith('UNKNOWN: Failed to parse {0}: '.format(tmp_path / 'missing'))


def test_device_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        DiskStatsParse().main([])
    assert excinfo.value.code == 3
    assert capsys.readouterr().out == 'UNKNOWN: Please specify a device with --device\n'
