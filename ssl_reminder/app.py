"""
程序入口与检查周期
"""
import sys
from datetime import datetime, timezone
from typing import Optional

from .interfaces import CertificateInspectorInterface, MailerInterface
from .models import CheckResult, Configuration, MailerCredentials
from .scheduler import Scheduler
from .services.certificate_inspector import CertificateInspector
from .services.config_loader import ConfigLoader
from .services.error_handler import ConfigurationError
from .services.expiration_collector import ExpirationCollector
from .services.logger import LoggerService
from .services.reminder_formatter import REMINDER_SUBJECT, ReminderFormatter
from .services.ses_mailer import SESMailer


class SSLReminder:
    """证书过期提醒主类"""

    def __init__(self, config: Configuration, credentials: Optional[MailerCredentials] = None,
                 inspector: Optional[CertificateInspectorInterface] = None,
                 mailer: Optional[MailerInterface] = None,
                 logger_service: Optional[LoggerService] = None):
        """
        初始化提醒器

        Args:
            config: 运行配置
            credentials: 邮件服务凭证，未指定 mailer 时必需
            inspector: 证书检查器
            mailer: 邮件发送器
            logger_service: 日志服务
        """
        if mailer is None and credentials is None:
            raise ValueError("credentials 和 mailer 至少需要提供一个")

        self.config = config
        self.logger_service = logger_service or LoggerService()
        self.inspector = inspector or CertificateInspector(timeout=config.timeout, port=config.port)
        self.mailer = mailer or SESMailer(credentials, region_name=config.region_name)
        self.collector = ExpirationCollector(
            self.inspector, self.logger_service, max_workers=config.max_workers
        )
        self.formatter = ReminderFormatter()

    def check(self, now: Optional[datetime] = None) -> CheckResult:
        """
        执行一次检查周期：获取过期时间，必要时发送提醒邮件

        Args:
            now: 当前时间，默认为当前UTC时间

        Returns:
            CheckResult: 检查结果
        """
        now = now or datetime.now(timezone.utc)
        start_time = datetime.now(timezone.utc)
        logger = self.logger_service.logger

        self.logger_service.log_check_start(len(self.config.hosts))
        snapshot = self.collector.collect(self.config.hosts)

        decision = self.formatter.decide_and_format(self.config, now, snapshot)

        notification_sent = False
        if decision.should_remind:
            notification_sent = self._remind(decision.body)
        else:
            logger.info(f"没有证书将在 {self.config.threshold_days} 天内过期，无需提醒")

        self.logger_service.log_check_end()
        summary = self.logger_service.get_execution_summary()

        return CheckResult(
            total_hosts=len(self.config.hosts),
            successful_checks=summary['successful_checks'],
            failed_checks=summary['failed_checks'],
            expiring_hosts=[record.host for record in decision.soon],
            should_remind=decision.should_remind,
            notification_sent=notification_sent,
            errors=[f"{error['host']}: {error['error_message']}" for error in summary['errors']],
            execution_time=(datetime.now(timezone.utc) - start_time).total_seconds()
        )

    def _remind(self, body: str) -> bool:
        """
        发送提醒邮件，失败时只记录日志

        Args:
            body: 邮件正文

        Returns:
            bool: 是否发送成功
        """
        try:
            sent = self.mailer.send(
                self.config.emails, self.config.from_address, REMINDER_SUBJECT, body
            )
        except Exception as e:
            self.logger_service.logger.error(f"发送提醒邮件时发生错误: {str(e)}")
            sent = False

        self.logger_service.log_notification_sent(self.config.emails, sent)
        return sent


def main():
    """进程入口：读取配置并每24小时执行一次检查"""
    logger_service = LoggerService()
    loader = ConfigLoader()

    try:
        config = loader.load()
        credentials = loader.load_credentials()
    except ConfigurationError as e:
        logger_service.logger.critical(str(e))
        sys.exit(1)

    logger_service.log_configuration_info(loader.describe(config, credentials))

    reminder = SSLReminder(config, credentials, logger_service=logger_service)
    Scheduler(reminder.check).run()


if __name__ == '__main__':
    main()
