#  vim:ts=4:sts=4:sw=4:et
#
#  License: Apache 2.0, see accompanying LICENSE file
#

import time

import pytest  # type: ignore[import]

import check_cert
from check_cert import CheckCert, parse_openssl_date

DAY = 86400


def openssl_date(epoch):
    return time.strftime('%b %d %H:%M:%S %Y GMT', time.gmtime(epoch))


class FakeOpenSSL(object):
    """Stands in for subprocess.Popen, printing a canned openssl output"""

    output = ''
    error = ''
    returncode = 0
    commands = []

    def __init__(self, cmd, stdout=None, stderr=None):
        self.cmd = cmd
        FakeOpenSSL.commands.append(cmd)

    def communicate(self):
        return (self.output.encode('utf-8'), self.error.encode('utf-8'))


@pytest.fixture(name="openssl")
def fixture_openssl(monkeypatch):
    FakeOpenSSL.output = ''
    FakeOpenSSL.error = ''
    FakeOpenSSL.returncode = 0
    FakeOpenSSL.commands = []
    monkeypatch.setattr(check_cert, 'Popen', FakeOpenSSL)
    return FakeOpenSSL


@pytest.fixture(name="cert")
def fixture_cert(tmp_path):
    path = tmp_path / 'server.pem'
    path.write_text('-----BEGIN CERTIFICATE-----\n')
    return str(path)


def args(cert, warning=30 * DAY, critical=7 * DAY, switch='--cert'):
    return [switch, cert, '--warning', str(warning), '--critical', str(critical)]


def test_parse_openssl_date():
    assert parse_openssl_date('Jun  1 12:00:00 2030 GMT') == 1906545600
    assert parse_openssl_date('Jun 01 12:00:00 2030') == 1906545600
    with pytest.raises(ValueError):
        parse_openssl_date('next tuesday')


def test_cert_ok(run_plugin, openssl, cert):
    openssl.output = 'notAfter={0}\n'.format(openssl_date(time.time() + 365 * DAY))
    (code, output) = run_plugin(CheckCert(), args(cert))
    assert code == 0
    assert output.startswith('OK: {0} expires in '.format(cert))
    assert ';2592000;604800' in output
    assert openssl.commands == [['openssl', 'x509', '-in', cert, '-noout', '-enddate']]


def test_cert_warning(run_plugin, openssl, cert):
    openssl.output = 'notAfter={0}\n'.format(openssl_date(time.time() + 10 * DAY))
    (code, output) = run_plugin(CheckCert(), args(cert))
    assert code == 1
    assert 'expires in 9 days' in output or 'expires in 10 days' in output
    assert '(WARNING < 2592000)' in output


def test_cert_expired(run_plugin, openssl, cert):
    openssl.output = 'notAfter={0}\n'.format(openssl_date(time.time() - 2 * DAY))
    (code, output) = run_plugin(CheckCert(), args(cert))
    assert code == 2
    assert '{0} expired 2 days'.format(cert) in output
    assert '(CRITICAL <= 604800)' in output


def test_crl(run_plugin, openssl, cert):
    openssl.output = 'nextUpdate={0}\n'.format(openssl_date(time.time() + 3 * DAY))
    (code, _) = run_plugin(CheckCert(), args(cert, switch='--crl'))
    assert code == 2
    assert openssl.commands == [['openssl', 'crl', '-in', cert, '-noout', '-nextupdate']]


def test_unparsable_output(run_plugin, openssl, cert):
    openssl.output = 'unable to load certificate\n'
    (code, output) = run_plugin(CheckCert(), args(cert))
    assert code == 3
    assert output == 'UNKNOWN: Certificate end date could not be parsed'


def test_not_a_certificate(run_plugin, openssl, cert):
    openssl.returncode = 1
    openssl.error = 'unable to load certificate\n140245:error:0909006C:PEM routines:get_name:no start line\n'
    (code, output) = run_plugin(CheckCert(), args(cert))
    assert code == 3
    assert output == 'UNKNOWN: Certificate end date could not be parsed, openssl returned 1: ' + \
        'unable to load certificate 140245:error:0909006C:PEM routines:get_name:no start line'


def test_missing_cert(run_plugin, openssl, tmp_path):
    missing = str(tmp_path / 'missing.pem')
    (code, output) = run_plugin(CheckCert(), args(missing))
    assert code == 3
    assert output == "UNKNOWN: Certificate {0} doesn't exist".format(missing)
    assert not openssl.commands


def test_thresholds_must_make_sense(run_plugin, openssl, cert):
    (code, output) = run_plugin(CheckCert(), args(cert, warning=DAY, critical=7 * DAY))
    assert code == 3
    assert output.startswith('UNKNOWN: Parameters do not make sense')


@pytest.mark.parametrize("cli_args, message", [
    (['--warning', '10', '--critical', '5'], "Don't know what to check"),
    (['--cert', 'a.pem', '--crl', 'b.pem', '--warning', '10', '--critical', '5'], 'mutually exclusive'),
    (['--cert', 'a.pem', '--critical', '5'], 'warning threshold not defined'),
])
def test_configuration_errors(run_plugin, openssl, cli_args, message):
    (code, output) = run_plugin(CheckCert(), cli_args)
    assert code == 3
    assert message in output
