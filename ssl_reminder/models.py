"""
数据模型定义
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Tuple


DEFAULT_THRESHOLD_DAYS = 30


@dataclass(frozen=True)
class Configuration:
    """运行配置，进程启动时构造一次"""
    hosts: Tuple[str, ...]
    emails: Tuple[str, ...]
    threshold_days: int = DEFAULT_THRESHOLD_DAYS
    from_address: Optional[str] = None
    timeout: int = 10
    port: int = 443
    max_workers: int = 1
    region_name: str = "us-east-1"

    def __post_init__(self):
        # 未指定发件人时使用第一个收件人
        if not self.from_address and self.emails:
            object.__setattr__(self, 'from_address', self.emails[0])


@dataclass(frozen=True)
class MailerCredentials:
    """邮件服务凭证"""
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ExpirationRecord:
    """单个主机的证书过期时间"""
    host: str
    expiration: datetime


@dataclass
class ReminderDecision:
    """提醒判断结果"""
    should_remind: bool
    body: str
    threshold_instant: datetime
    soon: List[ExpirationRecord] = field(default_factory=list)
    others: List[ExpirationRecord] = field(default_factory=list)

    def __iter__(self):
        # 支持 should_remind, body = decision
        yield self.should_remind
        yield self.body


@dataclass
class CheckResult:
    """单次检查周期的结果统计"""
    total_hosts: int
    successful_checks: int
    failed_checks: int
    expiring_hosts: List[str]
    should_remind: bool
    notification_sent: bool
    errors: List[str]
    execution_time: float
