import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class WeekendConfig(AppConfig):
    name = 'apps.weekend'
    verbose_name = 'Weekend planner'

    def ready(self):
        options = settings.WEEKEND_STORE
        if options.get('REDIS_URL'):
            logger.info("Weekend data stored in Redis under '%s'", options.get('KEY'))
        else:
            logger.warning(
                "No REDIS_URL configured: weekend data lives in process memory "
                "and is lost on restart"
            )
