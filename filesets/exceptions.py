class FilesetError(Exception):
    # base exception for all application-specific errors.
    pass

class InvalidArgument(FilesetError):
    # bad root path or bad fileset option.
    pass

class ConfigError(FilesetError):
    # errors reading configuration files.
    pass
