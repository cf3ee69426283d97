import datetime
from app import db

class Client(db.Model):
    __tablename__ = 'clients'
    __table_args__ = (
        db.UniqueConstraint('phone', 'user_id', name='uq_clients_phone_user'),
    )
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(50), nullable=False)
    address = db.Column(db.String(200))
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.datetime.utcnow,
                          onupdate=datetime.datetime.utcnow)
    
    # Relationships
    invoices = db.relationship('Invoice', back_populates='client')
    
    def __repr__(self):
        return f'<Client {self.name} - {self.phone}>'
