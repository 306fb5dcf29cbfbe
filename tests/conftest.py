import os

import pytest

from lish.interpreter import Interpreter

# Builtins such as cd and export change process-wide state, so interpreter
# fixtures run inside a private working directory and os.environ is put
# back afterwards.


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    saved_environ = dict(os.environ)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    os.environ.clear()
    os.environ.update(saved_environ)


@pytest.fixture
def interp(workdir):
    # An empty environ keeps the global frame free of the host's variables
    return Interpreter(interactive=False, environ={})


@pytest.fixture
def shell(workdir):
    return Interpreter(interactive=True, environ={})
