from indica.models.agent_profile import AgentProfile
from indica.models.application import Application, ApplicationStatusEnum
from indica.models.auditlog import AcaoAuditEnum, AuditLog
from indica.models.base import Base
from indica.models.city import City
from indica.models.cultural_group import CulturalGroup, GroupDocument, GroupMember, GroupRoleEnum
from indica.models.cultural_event import CulturalEvent, EventStatusEnum
from indica.models.entity import Entity, EntityStatusEnum, EntityTypeEnum
from indica.models.entity_portal import EntityPortal
from indica.models.evaluator import Evaluator
from indica.models.notice import Notice, NoticeCategory, NoticeStatusEnum
from indica.models.user import RoleEnum, User

__all__ = [
    'Base',
    'User',
    'RoleEnum',
    'City',
    'Entity',
    'EntityTypeEnum',
    'EntityStatusEnum',
    'Notice',
    'NoticeCategory',
    'NoticeStatusEnum',
    'Application',
    'ApplicationStatusEnum',
    'Evaluator',
    'CulturalGroup',
    'GroupMember',
    'GroupDocument',
    'GroupRoleEnum',
    'CulturalEvent',
    'EventStatusEnum',
    'AgentProfile',
    'EntityPortal',
    'AuditLog',
    'AcaoAuditEnum',
]
