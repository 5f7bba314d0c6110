import os
import pytest
import subprocess
import sys

import unitbackend


@pytest.fixture
def backend():
    return unitbackend.RecordingBackend()


@pytest.fixture
def start_pod(tmp_path):
    """ Return a function that launches a real pod process with the given
        command-line arguments and extra environment variables, and returns
        the :class:`subprocess.Popen` instance for the test to talk to.
        Every process started this way is killed afterwards if the test left
        it running.
    """

    here = os.path.dirname(os.path.abspath(__file__))
    source = os.path.join(os.path.dirname(here), 'src')
    started = list()

    def start(*extra, **variables):

        environment = dict(os.environ)
        pythonpath = environment.get('PYTHONPATH')
        if pythonpath:
            environment['PYTHONPATH'] = source + os.pathsep + pythonpath
        else:
            environment['PYTHONPATH'] = source

        for name in list(environment):
            if name.startswith('CALPOD_'):
                del environment[name]

        environment['CALPOD_HOME'] = str(tmp_path)
        environment.update(variables)

        arguments = list()
        arguments.append(sys.executable)
        arguments.append('-m')
        arguments.append('calpod')
        arguments.extend(extra)

        pipe = subprocess.PIPE
        pod = subprocess.Popen(arguments, stdin=pipe, stdout=pipe, stderr=pipe, env=environment)
        started.append(pod)
        return pod

    yield start

    for pod in started:
        if pod.poll() is None:
            pod.kill()
        pod.wait()
        for stream in (pod.stdin, pod.stdout, pod.stderr):
            if not stream.closed:
                stream.close()


@pytest.fixture
def run_pod(start_pod):
    """ A running pod process with an in-memory calendar store.
    """

    return start_pod('--memory', '--log-level', 'DEBUG')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
