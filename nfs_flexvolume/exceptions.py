"""Custom exceptions for the NFS FlexVolume driver."""


class FlexVolumeError(Exception):
    """Base exception for driver errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidVolumeSource(FlexVolumeError):
    """Mount request options are missing or malformed."""

    pass


class CommandError(FlexVolumeError):
    """An external command exited non-zero."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class MountError(CommandError):
    """Failed to mount the NFS share."""

    pass


class UnmountError(CommandError):
    """Failed to unmount a mount point."""

    pass


class SubPathError(FlexVolumeError):
    """Sub-directory could not be created or found."""

    pass


class PublishError(FlexVolumeError):
    """Target link could not be removed or created."""

    pass
