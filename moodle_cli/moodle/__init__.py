from moodle_cli.moodle.base import BaseMoodleService
from moodle_cli.moodle.factory import MoodleServiceFactory
from moodle_cli.moodle.rest_adapter import MoodleRestAdapter

__all__ = ["BaseMoodleService", "MoodleRestAdapter", "MoodleServiceFactory"]
