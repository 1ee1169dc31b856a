from ruscles import db
from ruscles.models.enums import ProjectStatus, Priority
from ruscles.utils.dates import utcnow, isoformat


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    customer_name = db.Column(db.String(150), nullable=False, index=True)
    customer_email = db.Column(db.String(255), nullable=True)
    customer_phone = db.Column(db.String(30), nullable=True)
    project_type = db.Column(db.String(100), nullable=False, index=True)
    status = db.Column(db.Enum(ProjectStatus), nullable=False, default=ProjectStatus.PLANNING, index=True)
    priority = db.Column(db.Enum(Priority), nullable=False, default=Priority.MEDIUM)
    location = db.Column(db.String(200), nullable=True)
    start_date = db.Column(db.DateTime, nullable=True)
    end_date = db.Column(db.DateTime, nullable=True)
    estimated_hours = db.Column(db.Float, nullable=True)
    budget = db.Column(db.Float, nullable=True)
    progress = db.Column(db.Integer, default=0, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    attachments = db.Column(db.JSON, nullable=False, default=list)
    tags = db.Column(db.JSON, nullable=False, default=list)

    manager_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_summary(self):
        return {
            'id': self.id,
            'title': self.title,
            'status': self.status.value,
            'projectType': self.project_type,
            'createdAt': isoformat(self.created_at),
        }

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'customerName': self.customer_name,
            'customerEmail': self.customer_email,
            'customerPhone': self.customer_phone,
            'projectType': self.project_type,
            'status': self.status.value,
            'priority': self.priority.value,
            'location': self.location,
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'estimatedHours': self.estimated_hours,
            'budget': self.budget,
            'progress': self.progress,
            'notes': self.notes,
            'attachments': self.attachments or [],
            'tags': self.tags or [],
            'manager': self.manager.to_summary() if self.manager else None,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
