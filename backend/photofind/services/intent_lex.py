import logging

from . import aws
from .config import AwsConfig, IntentConfig

logger = logging.getLogger("photofind.intent")


class LexIntent:
    def __init__(self, cfg: IntentConfig, aws_cfg: AwsConfig, lex=None):
        self.cfg = cfg
        self.lex = lex or aws.client("lexv2-runtime", aws_cfg)

    def slot_value(self, text: str) -> str:
        """Interpreted value of the configured slot, or "" when the bot didn't fill it."""
        resp = self.lex.recognize_text(
            botId=self.cfg.bot_id,
            botAliasId=self.cfg.bot_alias_id,
            localeId=self.cfg.locale_id,
            sessionId=self.cfg.session_id,
            text=text,
        )
        logger.debug("Lex response: %s", resp)
        intent = (resp.get("sessionState") or {}).get("intent") or {}
        slots = intent.get("slots") or {}
        # Unfilled slots come back as null
        slot = slots.get(self.cfg.slot_name) or {}
        return (slot.get("value") or {}).get("interpretedValue") or ""
