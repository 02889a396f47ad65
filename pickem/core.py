# -*- coding: utf-8 -*-

from os import environ, makedirs
import os.path
import logging
import logging.handlers

from . import utils

######################
# Config/Environment #
######################

FILE_DIR     = os.path.dirname(os.path.realpath(__file__))
BASE_DIR     = os.path.realpath(os.path.join(FILE_DIR, os.pardir))

CONFIG_DIR   = 'config'
DFLT_CONFIG  = ['config.yml']
CONFIG_FILES = environ.get('PICKEM_CONFIG_FILES') or DFLT_CONFIG
cfg          = utils.Config(CONFIG_FILES, os.path.join(BASE_DIR, CONFIG_DIR))

DEBUG        = int(environ.get('PICKEM_DEBUG') or 0)

########
# Data #
########

DATA_DIR     = 'data'

def DataFile(file_name: str, dir: str = DATA_DIR) -> str:
    """Given name of file, return full path name (in DATA_DIR, or specified
    directory)
    """
    return os.path.join(BASE_DIR, dir, file_name)

###########
# Logging #
###########

LOGGER_NAME  = environ.get('PICKEM_LOG_NAME') or 'pickem'
LOG_DIR      = 'log'
LOG_FILE     = LOGGER_NAME + '.log'
LOG_PATH     = os.path.join(BASE_DIR, LOG_DIR, LOG_FILE)
LOG_FMTR     = logging.Formatter('%(asctime)s %(levelname)s [%(filename)s:%(lineno)s]: %(message)s')
LOG_FILE_MAX = 25000000
LOG_FILE_NUM = 50

makedirs(os.path.dirname(LOG_PATH), exist_ok=True)
dflt_hand = logging.handlers.RotatingFileHandler(LOG_PATH, 'a', LOG_FILE_MAX, LOG_FILE_NUM)
dflt_hand.setLevel(logging.DEBUG)
dflt_hand.setFormatter(LOG_FMTR)

dbg_hand = logging.StreamHandler()
dbg_hand.setLevel(logging.DEBUG)
dbg_hand.setFormatter(LOG_FMTR)

log = logging.getLogger(LOGGER_NAME)
log.setLevel(logging.INFO)
log.addHandler(dflt_hand)
if DEBUG:
    log.setLevel(logging.DEBUG)
    if DEBUG > 1:
        log.addHandler(dbg_hand)

##############
# Exceptions #
##############

class DataError(RuntimeError):
    """Thrown for bad game or pick data at the storage boundary (e.g. unknown
    game status, winner not playing in the game); malformed individual picks are
    not errors, they are handled by the pool logic
    """
    pass

class ConfigError(RuntimeError):
    """Thrown if there is a problem with a config file entry (teams, pools, or
    rules), or combination of entries
    """
    pass

class LogicError(RuntimeError):
    """Thrown if a pool method is called in the wrong state (e.g. reporting
    before results are computed, or with no data source)
    """
    pass

class ImplementationError(RuntimeError):
    """Thrown if a data source passed to a `Pool` does not implement the
    required interface
    """
    pass
