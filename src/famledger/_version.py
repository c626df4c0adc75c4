"""Version information for famledger."""

VERSION = '0.3.0'
REPO_URL = 'https://github.com/famledger/famledger'
