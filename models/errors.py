class PipelineError(Exception):
    """Base exception for the weather job pipeline."""
    pass


class QueuePushError(PipelineError):
    """The payload never reached the queue, so no job row was written."""
    pass


class JobRecordError(PipelineError):
    """The payload is queued but its job row could not be written."""

    def __init__(self, job_id: str, cause: Exception):
        super().__init__(f"Job {job_id} was enqueued but its status row was not recorded: {cause}")
        self.job_id = job_id


class PayloadError(PipelineError):
    """A queue message that cannot be decoded into a job."""
    pass


class WeatherFetchError(PipelineError):
    """A single city could not be fetched or validated."""
    pass
