# -*- coding: utf-8 -*-
from .. import db

ONE_TIME_PROGRAMS = (
    'Yoga and Meditation',
    'Mental Health Support',
    'Awareness Programs',
    'Health Checkup Camps',
    'Gym Membership',
)

STATUS_PENDING = 'Pending'
STATUS_REJECTED = 'Rejected'


class EmployeeRequest(db.Model):
    __tablename__ = 'requests'
    # An employee holds at most one non-rejected request per one-time program
    __table_args__ = (
        db.UniqueConstraint('emp_id', 'active_program', name='uq_requests_active_program'),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    emp_id = db.Column(db.String(50), nullable=False, index=True)
    program = db.Column(db.String(255), nullable=False)
    program_time = db.Column(db.String(255), nullable=True)
    request_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(50), nullable=False, default=STATUS_PENDING)
    loan_type = db.Column(db.String(100), nullable=True)
    amount = db.Column(db.Numeric(38, 10), nullable=True)  # 28 integer digits, 10 decimal places
    reason = db.Column(db.Text, nullable=True)
    document_path = db.Column(db.String(255), nullable=True)
    active_program = db.Column(db.String(255), nullable=True)  # program name while the slot is held

    def refresh_active_program(self):
        if self.program in ONE_TIME_PROGRAMS and self.status != STATUS_REJECTED:
            self.active_program = self.program
        else:
            self.active_program = None

    def to_dict(self):
        """Convert the request to a JSON serializable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "emp_id": self.emp_id,
            "program": self.program,
            "program_time": self.program_time,
            "request_date": self.request_date.isoformat() if self.request_date else None,
            "status": self.status,
            "loan_type": self.loan_type,
            "amount": float(self.amount) if self.amount is not None else None,
            "reason": self.reason,
            "document_path": self.document_path
        }
