"""
Customer inquiries received through the website and the staff replies to them.
"""

from ruscles import db
from ruscles.models.enums import FormType, FormStatus, Priority, ResponseMethod
from ruscles.utils.dates import utcnow, isoformat


class FormSubmission(db.Model):
    __tablename__ = 'form_submissions'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(FormType), nullable=False, default=FormType.CONTACT, index=True)
    status = db.Column(db.Enum(FormStatus), nullable=False, default=FormStatus.NEW, index=True)
    priority = db.Column(db.Enum(Priority), nullable=False, default=Priority.MEDIUM, index=True)

    customer_info = db.Column(db.JSON, nullable=False, default=dict)
    form_data = db.Column(db.JSON, nullable=False, default=dict)
    tags = db.Column(db.JSON, nullable=False, default=list)
    notes = db.Column(db.Text, nullable=True)

    # Copied out of customer_info on write so list search stays a plain column filter
    customer_name = db.Column(db.String(200), nullable=True, index=True)
    customer_email = db.Column(db.String(255), nullable=True, index=True)

    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    submitted_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    last_updated = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    responses = db.relationship('FormResponse', backref='form', lazy='dynamic',
                                cascade='all, delete-orphan',
                                order_by='FormResponse.responded_at.desc()')

    def set_customer_info(self, customer_info):
        self.customer_info = customer_info
        self.customer_name = customer_info.get('name')
        self.customer_email = customer_info.get('email')

    def to_dict(self, include_responses='latest'):
        data = {
            'id': self.id,
            'type': self.type.value,
            'status': self.status.value,
            'priority': self.priority.value,
            'customerInfo': self.customer_info or {},
            'formData': self.form_data or {},
            'tags': self.tags or [],
            'notes': self.notes,
            'assignedTo': self.assigned_to_id,
            'assignedToUser': self.assigned_to.to_summary() if self.assigned_to else None,
            'submittedAt': isoformat(self.submitted_at),
            'lastUpdated': isoformat(self.last_updated),
            'createdAt': isoformat(self.created_at),
        }
        if include_responses == 'all':
            data['responses'] = [response.to_dict() for response in self.responses]
        elif include_responses == 'latest':
            latest = self.responses.first()
            data['responses'] = [latest.to_dict()] if latest else []
        return data


class FormResponse(db.Model):
    __tablename__ = 'form_responses'

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.Integer, db.ForeignKey('form_submissions.id'), nullable=False, index=True)
    responded_by = db.Column(db.String(255), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    method = db.Column(db.Enum(ResponseMethod), nullable=False, default=ResponseMethod.EMAIL)
    content = db.Column(db.Text, nullable=False)
    attachments = db.Column(db.JSON, nullable=False, default=list)
    responded_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    user = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'formId': self.form_id,
            'respondedBy': self.responded_by,
            'respondedAt': isoformat(self.responded_at),
            'method': self.method.value,
            'content': self.content,
            'attachments': self.attachments or [],
            'createdAt': isoformat(self.created_at),
            'user': self.user.to_summary() if self.user else None,
        }
