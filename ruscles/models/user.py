from ruscles import db
from ruscles.models.enums import Role
from ruscles.utils.dates import utcnow, isoformat


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(30), nullable=True)
    company = db.Column(db.String(150), nullable=True)
    image = db.Column(db.String(512), nullable=True)
    role = db.Column(db.Enum(Role), nullable=False, default=Role.USER, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Only set for admins created with `flask create-admin`
    password_hash = db.Column(db.String(255), nullable=True)

    last_login_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    managed_projects = db.relationship('Project', backref='manager', lazy='dynamic',
                                       foreign_keys='Project.manager_id')
    assigned_forms = db.relationship('FormSubmission', backref='assigned_to', lazy='dynamic',
                                     foreign_keys='FormSubmission.assigned_to_id')

    def __repr__(self):
        return f"<User {self.email}>"

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def to_summary(self):
        return {'id': self.id, 'name': self.name, 'email': self.email}

    def to_dict(self, include_counts=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'image': self.image,
            'role': self.role.value,
            'isActive': self.is_active,
            'lastLoginAt': isoformat(self.last_login_at),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_counts:
            data['_count'] = {
                'managedProjects': self.managed_projects.count(),
                'assignedForms': self.assigned_forms.count(),
            }
        return data
