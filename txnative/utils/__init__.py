from txnative.utils.polling import PollState, poll_with_deadline

__all__ = ["PollState", "poll_with_deadline"]
