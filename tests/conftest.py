"""
Shared fixtures: the reference INI text and the document it parses to.
"""

import pytest

from plainini import IniDocument

REF_INI = """\
; last modified 1 April 2001 by John Doe
[owner]
name = John Doe
organization = Acme Widgets Inc.

[database]
; use IP address in case network name resolution is not working
server = 192.0.2.62     
port = 143
file = "payroll.dat"
"""

REF_SECTIONS = {
    'owner': {'name': 'John Doe', 'organization': 'Acme Widgets Inc.'},
    'database': {
        'server': '192.0.2.62', 'port': '143', 'file': '"payroll.dat"'},
}


@pytest.fixture
def ref_text() -> str:
    return REF_INI


@pytest.fixture
def ref_doc() -> IniDocument:
    return IniDocument(REF_SECTIONS)
