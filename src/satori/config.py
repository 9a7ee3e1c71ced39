""" Client configuration: where to find the remote engine, and which
    credentials to present. Settings are read from a per-profile JSON file
    in the configuration :func:`directory`, and any ``SATORI_*`` environment
    variables take precedence over the file.
"""

import logging
import os
import threading

from . import json

logger = logging.getLogger(__name__)

defaults = dict()
defaults['host'] = 'ws://localhost:1234'
defaults['username'] = ''
defaults['password'] = ''
defaults['timeout'] = None

environment = dict()
environment['host'] = 'SATORI_HOST'
environment['username'] = 'SATORI_USERNAME'
environment['password'] = 'SATORI_PASSWORD'
environment['timeout'] = 'SATORI_TIMEOUT'

_lock = threading.Lock()


def directory(default=None):
    """ Return the directory location where we should be loading and/or saving
        configuration files. This defaults to ``$HOME/.satori``, but can be
        overridden by calling this method with a valid path, or by setting
        the ``SATORI_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        if os.path.exists(default):
            pass
        else:
            os.makedirs(default, mode=0o775)

        os.environ['SATORI_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['SATORI_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('SATORI_HOME and HOME environment variables not set, cannot determine Satori configuration directory')

    found = os.path.join(home, '.satori')

    directory.found = found
    return found

directory.found = None



def filename(profile='default'):
    """ Return the path to the JSON file holding the named *profile*.
    """

    return os.path.join(directory(), 'client', profile + '.json')



def load(profile='default'):
    """ Return the settings for the named *profile* as a dictionary with
        the keys host, username, password, and timeout. Missing values fall
        back to the module-level defaults; environment variables override
        anything read from disk.
    """

    settings = dict(defaults)
    path = filename(profile)

    try:
        with open(path, 'rb') as file:
            contents = file.read()
    except FileNotFoundError:
        logger.debug('no configuration file for profile %r at %s', profile, path)
    else:
        stored = json.loads(contents)
        if not isinstance(stored, dict):
            raise ValueError('configuration file is not a JSON object: ' + path)

        for key in defaults:
            if key in stored:
                settings[key] = stored[key]

    for key, variable in environment.items():
        try:
            settings[key] = os.environ[variable]
        except KeyError:
            pass

    timeout = settings['timeout']
    if timeout is not None and timeout != '':
        settings['timeout'] = float(timeout)
    else:
        settings['timeout'] = None

    return settings



def save(settings, profile='default'):
    """ Write the provided *settings* to the file for the named *profile*.
        Only the recognized keys are saved.
    """

    path = filename(profile)
    parent = os.path.dirname(path)

    stored = dict()
    for key in defaults:
        if key in settings:
            stored[key] = settings[key]

    contents = json.dumps(stored)

    with _lock:
        if os.path.isdir(parent):
            pass
        else:
            os.makedirs(parent, mode=0o775)

        with open(path, 'wb') as file:
            file.write(contents)

    return path


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
