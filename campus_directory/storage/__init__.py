from campus_directory.storage.base import DirectoryStore, Record
from campus_directory.storage.hosted import HostedDirectoryStore
from campus_directory.storage.json_file import JsonFileDirectoryStore

__all__ = [
    "DirectoryStore",
    "Record",
    "HostedDirectoryStore",
    "JsonFileDirectoryStore",
]
