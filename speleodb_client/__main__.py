import sys

from speleodb_client.app import run_app

sys.exit(run_app())
