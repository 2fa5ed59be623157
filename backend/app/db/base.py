from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.customer import Customer  # noqa: F401
from backend.app.models.task import Task  # noqa: F401
from backend.app.models.agreement import Agreement  # noqa: F401
from backend.app.models.time_entry import TimeEntry  # noqa: F401
from backend.app.models.expense import Expense  # noqa: F401
from backend.app.models.invoice import Invoice  # noqa: F401
from backend.app.models.invoice_line_item import InvoiceLineItem  # noqa: F401
