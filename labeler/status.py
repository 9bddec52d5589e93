class ExitCodes:
    SUCCESS = 0
    ERROR = 1
    CONFIGURATION_ERROR = 2
