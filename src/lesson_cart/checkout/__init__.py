from .orchestrator import CheckoutOrchestrator, SUCCESS_MESSAGE, failure_message

__all__ = ["CheckoutOrchestrator", "SUCCESS_MESSAGE", "failure_message"]
