"""
Service layer for skills.

Skills carry an integer ``order`` that defines the display order on the
public site. New skills go to the end of the list; ``reorder`` replaces the
order of the submitted ids in a single transaction.
"""

from sqlalchemy import select, update, func
from devfolio.core import db, Database
from .models import Skill

# Ids outside the signed 64-bit range cannot exist in any supported database
MIN_SKILL_ID = -2**63
MAX_SKILL_ID = 2**63 - 1

# pg_advisory_xact_lock key taken by create_skill
SKILL_ORDER_LOCK_ID = 72001


class SkillService:
    """Ordering and CRUD operations on the skills table."""

    @classmethod
    def list_skills(cls):
        """Return all skills sorted by display order."""
        return db.session.execute(select(Skill).order_by(Skill.order, Skill.id)).scalars().all()

    @classmethod
    def get_skill(cls, skill_id):
        return db.session.get(Skill, skill_id)

    @classmethod
    def create_skill(cls, data):
        """
        Insert a skill at the end of the list.

        The order is computed by the INSERT itself
        (``COALESCE(MAX(order), -1) + 1``) rather than read beforehand.
        """
        next_order = select(func.coalesce(func.max(Skill.order), -1) + 1).scalar_subquery()
        skill = Skill(
            name=data['name'],
            level=data['level'],
            category=data.get('category', 'Other'),
            order=next_order,
        )
        try:
            if Database.dialect_name() == 'postgresql':
                # Held until commit, so concurrent creates compute MAX(order) one at a time
                db.session.execute(select(func.pg_advisory_xact_lock(SKILL_ORDER_LOCK_ID)))
            db.session.add(skill)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return skill

    @classmethod
    def update_skill(cls, skill_id, data):
        """Update name/level/category. Returns None if the skill does not exist."""
        skill = db.session.get(Skill, skill_id)
        if not skill:
            return None

        for field in ('name', 'level', 'category'):
            if field in data:
                setattr(skill, field, data[field])
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return skill

    @classmethod
    def delete_skill(cls, skill_id):
        """Delete a skill. Gaps left in the order are closed by the next reorder."""
        skill = db.session.get(Skill, skill_id)
        if not skill:
            return False
        db.session.delete(skill)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return True

    @classmethod
    def reorder(cls, skill_ids):
        """
        Persist ``skill_ids`` as the new display order: the skill at index i
        gets ``order = i``.

        Ids that do not exist are ignored, including ids too large to be stored. If an id appears twice its last
        position wins. Skills missing from the list keep their old order.
        Either every update is committed or none is.

        Returns the number of skills that were updated.
        """
        positions = {}
        for position, skill_id in enumerate(skill_ids):
            positions[skill_id] = position

        updated = 0
        try:
            # Ascending id order keeps row-lock acquisition consistent between concurrent reorders
            for skill_id in sorted(i for i in positions if MIN_SKILL_ID <= i <= MAX_SKILL_ID):
                result = db.session.execute(
                    update(Skill)
                    .where(Skill.id == skill_id)
                    .values(order=positions[skill_id])
                    .execution_options(synchronize_session=False)
                )
                updated += result.rowcount
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return updated
