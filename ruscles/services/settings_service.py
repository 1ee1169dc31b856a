import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import IntegrityError

from ruscles.middleware.validation import ValidationMiddleware
from ruscles.models.site import Setting
from ruscles.services.base import ResourceService, as_str, as_bool
from ruscles.utils.pagination import parse_bool_arg

logger = logging.getLogger(__name__)


class SettingsService(ResourceService):
    """Key-value settings with upsert-by-key semantics"""
    model = Setting
    label = 'Setting'
    plural = 'settings'
    sort_columns = {'key': Setting.key, 'updatedAt': Setting.updated_at}
    default_sort = ('key', 'asc')

    def apply_filters(self, query, args):
        if args.get('key'):
            query = query.filter(Setting.key == args['key'])
        is_public = parse_bool_arg(args, 'isPublic')
        if is_public is not None:
            query = query.filter(Setting.is_public == is_public)
        return query

    def public_settings(self) -> List[Setting]:
        return Setting.query.filter_by(is_public=True).order_by(Setting.key.asc()).all()

    @staticmethod
    def _apply(setting: Setting, data: Dict[str, Any], updated_by: str) -> None:
        setting.value = as_str(data['value'], 'value')
        if 'description' in data:
            setting.description = as_str(data['description'], 'description') if data['description'] is not None else None
        if data.get('isPublic') is not None:
            setting.is_public = as_bool(data['isPublic'], 'isPublic')
        setting.updated_by = updated_by

    def upsert(self, data: Dict[str, Any], updated_by: str) -> Tuple[Setting, bool]:
        """
        Create the setting if its key is new, otherwise update it.

        Returns (setting, created). A concurrent insert of the same key is
        retried as an update.
        """
        ValidationMiddleware.require_fields(data, ['key', 'value'])
        key = as_str(data['key'], 'key').strip()

        setting = Setting.query.filter_by(key=key).first()
        if setting is not None:
            self._apply(setting, data, updated_by)
            self.session.commit()
            return setting, False

        setting = Setting(key=key, is_public=False)
        self._apply(setting, data, updated_by)
        try:
            with self.session.begin_nested():
                self.session.add(setting)
            self.session.commit()
            logger.info(f"Created setting {key}")
            return setting, True
        except IntegrityError:
            logger.info(f"Setting {key} was created concurrently, updating instead")
            self.session.rollback()
            setting = Setting.query.filter_by(key=key).one()
            self._apply(setting, data, updated_by)
            self.session.commit()
            return setting, False
