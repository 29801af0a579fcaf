import logging

from slabwriter.constants import FILE_MODES, WARNINGS
from slabwriter.errors import ConfigurationError

logger = logging.getLogger(__name__)

class WriterSettings:
    simplified_settings = (
        'file_mode',
        'collective',
        'profiler_on',
        'warnings_on')

    def __init__(self,
        file_mode : str = 'w',
        collective : bool = True,
        profiler_on : bool = False,
        warnings_on : bool = WARNINGS):

        self.warnings_on = warnings_on
        self.file_mode = file_mode
        self.collective = collective
        self.profiler_on = profiler_on
        self.settingsOK = True

    def __repr__(self):
        rep = "\nWriter settings:\n\n"
        for setting, val in self.__dict__.items():
            rep += '%s: %s\n' % (setting, str(val))
        return rep

    def __setattr__(self, name, value):
        if name == 'file_mode' and value not in FILE_MODES:
            raise ConfigurationError("file mode '%s' is not valid, use ('" % value + "', '".join(FILE_MODES) + "')")
        elif name in ('collective', 'profiler_on', 'warnings_on') and type(value) != bool:
            raise ConfigurationError("'%s' has to be a boolean" % name)

        if self.__dict__.get('settingsOK') and self.__dict__.get(name) != value:
            if self.warnings_on:
                logger.warning("'%s' value has been changed to %s", name, str(value))
        object.__setattr__(self, name, value)

    def to_dict(self, simplified = False):
        l = {}
        for setting, val in self.__dict__.items():
            if simplified and setting not in self.simplified_settings: continue
            l[setting] = val
        return l
