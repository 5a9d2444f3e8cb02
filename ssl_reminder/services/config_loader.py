"""
配置加载服务
"""
import os
from typing import Any, Dict, Mapping, Optional, Tuple
import logging

from ..models import Configuration, MailerCredentials, DEFAULT_THRESHOLD_DAYS
from .error_handler import ConfigurationError


class ConfigLoader:
    """从环境变量读取运行配置"""

    # 必需的环境变量
    required_env_vars = {
        'HOSTS': '主机列表（逗号分隔）',
        'EMAILS': '收件人列表（逗号分隔）',
        'MAIL_USERNAME': '邮件服务用户名',
        'MAIL_PASSWORD': '邮件服务密码'
    }

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        初始化配置加载器

        Args:
            environ: 环境变量，默认为 os.environ
        """
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger(__name__)

    def load(self) -> Configuration:
        """
        读取运行配置

        Returns:
            Configuration: 运行配置

        Raises:
            ConfigurationError: 缺少必需配置或数值格式无效
        """
        threshold_days = self._optional_int('THRESHOLD_DAYS', DEFAULT_THRESHOLD_DAYS)
        if threshold_days < 0:
            raise ConfigurationError(f"THRESHOLD_DAYS 不能为负数: {threshold_days}")

        timeout = self._optional_int('TLS_TIMEOUT', 10)
        if timeout <= 0:
            raise ConfigurationError(f"TLS_TIMEOUT 必须大于0: {timeout}")

        emails = self._split_list('EMAILS')
        hosts = self._split_list('HOSTS')
        self.logger.info(f"成功加载 {len(hosts)} 个主机, {len(emails)} 个收件人")

        return Configuration(
            hosts=hosts,
            emails=emails,
            threshold_days=threshold_days,
            from_address=self._optional('FROM', emails[0]),
            timeout=timeout,
            max_workers=self._optional_int('MAX_WORKERS', 1),
            region_name=self._optional('AWS_REGION', 'us-east-1')
        )

    def load_credentials(self) -> MailerCredentials:
        """读取邮件服务凭证"""
        return MailerCredentials(
            username=self._mandatory('MAIL_USERNAME'),
            password=self._mandatory('MAIL_PASSWORD')
        )

    def describe(self, config: Configuration, credentials: MailerCredentials) -> Dict[str, Any]:
        """
        配置摘要，用于日志记录

        Args:
            config: 运行配置
            credentials: 邮件服务凭证

        Returns:
            Dict[str, Any]: 配置信息
        """
        return {
            'hosts': ', '.join(config.hosts),
            'emails': ', '.join(config.emails),
            'from': config.from_address,
            'threshold_days': config.threshold_days,
            'tls_timeout': config.timeout,
            'max_workers': config.max_workers,
            'region_name': config.region_name,
            'mail_username': credentials.username,
            'mail_password': credentials.password
        }

    def _mandatory(self, key: str) -> str:
        value = self.environ.get(key, "")
        if not value.strip():
            description = self.required_env_vars.get(key, key)
            raise ConfigurationError(f"缺少必需的环境变量: {key} ({description})")
        return value

    def _optional(self, key: str, default: str) -> str:
        value = self.environ.get(key, "")
        return value.strip() if value.strip() else default

    def _optional_int(self, key: str, default: int) -> int:
        value = self.environ.get(key, "")
        if not value.strip():
            return default
        try:
            return int(value.strip())
        except ValueError:
            raise ConfigurationError(f"{key} 格式无效: {value}")

    def _split_list(self, key: str) -> Tuple[str, ...]:
        """
        解析逗号分隔的列表

        Args:
            key: 环境变量名

        Returns:
            Tuple[str, ...]: 去除空白和空项后的列表
        """
        items = tuple(item.strip() for item in self._mandatory(key).split(',') if item.strip())
        if not items:
            raise ConfigurationError(f"{key} 中没有有效的项")
        return items
