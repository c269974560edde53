"""Log Enricher - Constants and patterns"""

VERSION = "1.0.0"

# Log type detection
SSH_MARKERS = ('sshd', 'pam_unix')
HTTP_PREFIX_PATTERN = r'^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}'

# SSH grammar, evaluated in order (first match wins)
SSH_PATTERNS = [
    {
        'event': 'Accepted password',
        'pattern': r'sshd\[(?P<pid>\d+)\]: Accepted password for (?P<user>\S+) from (?P<src_ip>\S+)',
        'fields': {},
    },
    {
        'event': 'Failed password',
        'pattern': r'sshd\[(?P<pid>\d+)\]: Failed password for (?:invalid user )?(?P<user>\S+) from (?P<src_ip>\S+)',
        'fields': {},
    },
    {
        'event': 'session opened',
        'pattern': r'pam_unix\(sshd:session\): session opened for user (?P<user>\S+)',
        'fields': {'service': 'sshd'},
    },
    {
        'event': 'session closed',
        'pattern': r'pam_unix\(sshd:session\): session closed for user (?P<user>\S+)',
        'fields': {'service': 'sshd'},
    },
    {
        'event': 'User login context',
        'pattern': r'User (?P<user>.*) logged in',
        'fields': {'service': 'sshd'},
    },
]

INVALID_USER_MARKER = 'invalid user'

# Apache common log format
HTTP_PATTERN = (
    r'^(?P<src_ip>\S+) - (?P<ident>\S+) \[(?P<timestamp>[^\]]+)\] '
    r'"(?P<request>[^"]+)" (?P<status_code>\d+) (?P<size>\d+)'
)

# Enrichment
DEFAULT_API_URL = "http://ip-api.com/json/{ip}?fields=status,message,country,city,isp,query"
MISSING_VALUE = 'N/A'
UNKNOWN_VALUE = 'Unknown'
API_ERROR_FALLBACK = 'Failed'
PLACEHOLDER_IP = '-'

# Fields the lookup service returns that never reach the output
INTERNAL_FIELDS = ('query',)

OUTPUT_EXTENSIONS = {
    'keyvalue': 'txt',
    'json': 'json',
}
OUTPUT_BASENAME = 'enriched_logs'
