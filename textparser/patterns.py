# -*- coding: utf-8 -*-
"""\
A place to collect line patterns from existing log formats and
standards, so that common logs parse without writing any expressions.

Apache combined access log:

  127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326 "http://www.example.com/start.html" "Mozilla/4.08"

  Time format: [day/month/year:hour:minute:second zone]

Nginx default access log (the first field is the remote address, the
second the host):

  78.178.243.200 - - [22/Jun/2013:15:02:31 -0700] "GET /favicon.ico HTTP/1.1" 404 570 "-" "Mozilla/5.0"

BSD syslog (RFC 3164), which has no year:

  Jun 22 15:25:38 myhost sshd[4242]: Accepted publickey for root
"""

import re


ACCESS_LOG_TIME_FORMAT = '%d/%b/%Y:%H:%M:%S %z'
SYSLOG_TIME_FORMAT = '%b %d %H:%M:%S'

APACHE_RE = re.compile(
    r'^(?P<host>[^ ]*) [^ ]* (?P<user>[^ ]*) \[(?P<time>[^\]]*)\]'
    r' "(?P<method>\S+)(?: +(?P<path>[^ ]*) +\S*)?"'
    r' (?P<code>[^ ]*) (?P<size>[^ ]*)'
    r'(?: "(?P<referer>[^\"]*)" "(?P<agent>[^\"]*)")?$')

NGINX_RE = re.compile(
    r'^(?P<remote>[^ ]*) (?P<host>[^ ]*) (?P<user>[^ ]*)'
    r' \[(?P<time>[^\]]*)\]'
    r' "(?P<method>\S+)(?: +(?P<path>[^ ]*) +\S*)?"'
    r' (?P<code>[^ ]*) (?P<size>[^ ]*)'
    r'(?: "(?P<referer>[^\"]*)" "(?P<agent>[^\"]*)")?$')

SYSLOG_RE = re.compile(
    r'^(?P<time>[^ ]*\s*[^ ]* [^ ]*) (?P<host>[^ ]*)'
    r' (?P<ident>[a-zA-Z0-9_\/\.\-]*)(?:\[(?P<pid>[0-9]+)\])?'
    r'[^\:]*\: *(?P<message>.*)$')


# (?<name>...) is common outside Python; lookbehinds ((?<= and (?<!)
# are left alone by requiring a name character after the "<".
_ALT_NAMED_GROUP_RE = re.compile(r'(?<!\\)\(\?<(?=[A-Za-z_])')


def compile_pattern(pattern_str):
    """Compile *pattern_str*, also accepting ``(?<name>...)`` named
    groups alongside Python's ``(?P<name>...)``. Raises
    :exc:`re.error` on invalid expressions.
    """
    return re.compile(_ALT_NAMED_GROUP_RE.sub('(?P<', pattern_str))
