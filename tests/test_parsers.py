import pytest

from log_enricher.models import LogType
from log_enricher.parsers import collect_keys, detect_log_type, extract_http, extract_ssh


class TestDetectLogType:
    @pytest.mark.parametrize("line", [
        "Oct 10 10:00:00 host sshd[123]: Accepted password for bob from 1.2.3.4 port 22",
        "Oct 10 10:00:00 host CRON[9]: pam_unix(cron:session): session opened for user root",
    ])
    def test_ssh(self, line):
        assert detect_log_type(line) is LogType.SSH

    def test_http(self):
        line = '1.2.3.4 - bob [10/Oct/2000:13:55:36] "GET /x HTTP/1.0" 200 2326'
        assert detect_log_type(line) is LogType.HTTP

    def test_http_prefix_does_not_validate_octets(self):
        assert detect_log_type("999.999.999.999 whatever") is LogType.HTTP

    def test_ssh_markers_take_priority(self):
        assert detect_log_type("1.2.3.4 sshd something") is LogType.SSH

    @pytest.mark.parametrize("line", ["hello world", " 1.2.3.4 - - leading space", "1.2.3 - x"])
    def test_unknown(self, line):
        assert detect_log_type(line) is LogType.UNKNOWN


class TestExtractSsh:
    def test_accepted_password(self):
        line = "Oct 10 10:00:00 host sshd[321]: Accepted password for alice from 192.168.1.9 port 5000 ssh2"
        assert extract_ssh(line) == {
            'sshd_event': 'Accepted password',
            'pid': '321',
            'user': 'alice',
            'src_ip': '192.168.1.9',
        }

    def test_failed_password_invalid_user(self):
        line = "Oct 10 10:00:00 host sshd[123]: Failed password for invalid user root from 10.0.0.5 port 4444"
        assert extract_ssh(line) == {
            'sshd_event': 'Failed password',
            'pid': '123',
            'user': 'invalid user root',
            'src_ip': '10.0.0.5',
        }

    def test_failed_password_valid_user(self):
        line = "Oct 10 10:00:00 host sshd[77]: Failed password for bob from 10.0.0.7 port 1 ssh2"
        event = extract_ssh(line)
        assert event['user'] == 'bob'
        assert event['src_ip'] == '10.0.0.7'

    def test_session_opened(self):
        line = "Oct 10 10:00:01 host sshd[5]: pam_unix(sshd:session): session opened for user bob by (uid=0)"
        assert extract_ssh(line) == {'sshd_event': 'session opened', 'user': 'bob', 'service': 'sshd'}

    def test_session_closed(self):
        line = "Oct 10 10:00:02 host sshd[5]: pam_unix(sshd:session): session closed for user bob"
        assert extract_ssh(line) == {'sshd_event': 'session closed', 'user': 'bob', 'service': 'sshd'}

    def test_user_login_context_fallback(self):
        line = "Oct 10 10:00:03 host sshd[5]: User jane doe logged in"
        assert extract_ssh(line) == {
            'sshd_event': 'User login context',
            'user': 'jane doe',
            'service': 'sshd',
        }

    def test_first_match_wins(self):
        line = "host sshd[1]: Accepted password for bob from 1.1.1.1 port 2; User x logged in"
        assert extract_ssh(line)['sshd_event'] == 'Accepted password'

    def test_no_match(self):
        assert extract_ssh("Oct 10 10:00:00 host sshd[1]: Connection closed by 1.2.3.4") is None


class TestExtractHttp:
    def test_common_log_format(self):
        line = '1.2.3.4 - bob [10/Oct/2000:13:55:36] "GET /x HTTP/1.0" 200 2326'
        assert extract_http(line) == {
            'src_ip': '1.2.3.4',
            'ident': 'bob',
            'timestamp': '10/Oct/2000:13:55:36',
            'request': 'GET /x HTTP/1.0',
            'status_code': '200',
            'size': '2326',
        }

    def test_field_order(self):
        line = '1.2.3.4 - - [10/Oct/2000:13:55:36 -0700] "GET / HTTP/1.1" 404 0'
        assert list(extract_http(line)) == ['src_ip', 'ident', 'timestamp', 'request', 'status_code', 'size']

    def test_dash_size_does_not_match(self):
        assert extract_http('1.2.3.4 - - [10/Oct/2000] "GET / HTTP/1.1" 304 -') is None

    def test_garbage(self):
        assert extract_http("not a log line") is None


class TestCollectKeys:
    def test_deduplicates_and_skips_placeholders(self):
        events = [
            {'src_ip': '1.1.1.1'},
            {'src_ip': '1.1.1.1'},
            {'src_ip': '-'},
            {'src_ip': ''},
            {'sshd_event': 'session opened'},
            {'src_ip': '2.2.2.2'},
        ]
        assert collect_keys(events) == {'1.1.1.1', '2.2.2.2'}

    def test_empty(self):
        assert collect_keys([]) == set()


def test_non_ascii_digits_are_not_an_ip_prefix():
    assert detect_log_type('١.٢.٣.٤ - x') is LogType.UNKNOWN
    assert extract_http('١.٢.٣.٤ - bob [t] "GET / HTTP/1.0" ٢٠٠ 5') is None
    assert extract_ssh('host sshd[١٢]: Accepted password for bob from 1.1.1.1') is None
