class FerriteError(Exception):
    pass


class TransportError(FerriteError):
    pass


class ConnectError(TransportError):
    pass


class NotConnectedError(FerriteError):
    pass


class CommandError(FerriteError):
    pass


class ScanError(FerriteError):
    pass


class ScanCancelled(FerriteError):
    pass


class ConfigError(FerriteError):
    pass


class UsageError(FerriteError):
    pass
