""" Launching and stopping a local engine process. A :class:`satori.Client`
    never starts an engine, and an :class:`Engine` never speaks the
    protocol.
"""

import abc
import logging
import subprocess

logger = logging.getLogger(__name__)


class Launcher(abc.ABC):
    """ The capability to start a process from an argument vector.
    """

    @abc.abstractmethod
    def launch(self, arguments):
        """ Start the process and return a handle offering ``poll()``,
            ``terminate()``, ``kill()``, ``wait(timeout)`` and
            ``returncode``, as :class:`subprocess.Popen` does.
        """


# end of class Launcher



class SubprocessLauncher(Launcher):
    """ Launch with :class:`subprocess.Popen`. The engine's output is
        discarded unless *stdout* and *stderr* are given.
    """

    def __init__(self, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, env=None, cwd=None):
        self.stdout = stdout
        self.stderr = stderr
        self.env = env
        self.cwd = cwd


    def launch(self, arguments):
        return subprocess.Popen(list(arguments), stdout=self.stdout, stderr=self.stderr, env=self.env, cwd=self.cwd)


# end of class SubprocessLauncher



class Engine:
    """ A local engine process: the *executable* plus its *arguments*,
        started via *launcher* (default: :class:`SubprocessLauncher`).
    """

    def __init__(self, executable, arguments=(), launcher=None):

        if launcher is None:
            launcher = SubprocessLauncher()

        self.executable = executable
        self.arguments = tuple(arguments)
        self.launcher = launcher
        self.process = None


    def __enter__(self):
        self.start()
        return self


    def __exit__(self, *exc_info):
        self.stop()


    @property
    def running(self):
        return self.process is not None and self.process.poll() is None


    @property
    def returncode(self):

        if self.process is None:
            return None

        return self.process.poll()


    def start(self):

        if self.running:
            raise RuntimeError('engine already running: %s' % (self.executable))

        arguments = (self.executable,) + self.arguments
        self.process = self.launcher.launch(arguments)

        logger.info('engine started: %s', ' '.join(arguments))


    def stop(self, timeout=5):
        """ Terminate the engine, escalating to a kill if it has not exited
            after *timeout* seconds. Returns the exit status, or None if the
            engine was never started.
        """

        process = self.process

        if process is None:
            return None

        if process.poll() is None:
            process.terminate()

            try:
                process.wait(timeout)
            except subprocess.TimeoutExpired:
                logger.warning('engine did not exit in %.1f sec, killing it', timeout)
                process.kill()
                process.wait()

        logger.info('engine stopped: %s (status %s)', self.executable, process.returncode)
        return process.returncode


# end of class Engine


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
