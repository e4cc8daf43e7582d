# case_servicing_service/app/__init__.py
import logging

logger = logging.getLogger(__name__)
logger.info("Case Servicing App Initialized")
