"""Router package exports."""
from . import payroll

__all__ = [
	"payroll",
]
