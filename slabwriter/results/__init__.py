from slabwriter.results.storage import StorageManager
