import os
from textwrap import dedent

import pytest


@pytest.fixture
def project(tmp_path):
	"""Write ``{relative path: source}`` under tmp_path and return its real path."""

	def write(files):
		for rel, content in files.items():
			p = tmp_path / rel
			p.parent.mkdir(parents=True, exist_ok=True)
			p.write_text(dedent(content))
		return os.path.realpath(str(tmp_path))

	return write
