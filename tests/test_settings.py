import logging
import pytest

from slabwriter.errors import ConfigurationError
from slabwriter.settings import WriterSettings

def test_defaults():
    settings = WriterSettings()
    assert settings.to_dict(simplified = True) == {
        'warnings_on' : False, 'file_mode' : 'w', 'collective' : True, 'profiler_on' : False}

def test_invalid_file_mode():
    with pytest.raises(ConfigurationError):
        WriterSettings(file_mode = 'r')

def test_invalid_flag():
    settings = WriterSettings()
    with pytest.raises(ConfigurationError):
        settings.collective = 'yes'

def test_changes_are_logged(caplog):
    settings = WriterSettings(warnings_on = True)
    with caplog.at_level(logging.WARNING, logger = 'slabwriter.settings'):
        settings.file_mode = 'a'
    assert "'file_mode' value has been changed to a" in caplog.text
    assert 'file_mode: a' in repr(settings)
