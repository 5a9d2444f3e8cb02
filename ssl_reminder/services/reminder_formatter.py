"""
提醒判断与邮件内容格式化服务
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Tuple
import logging

from ..models import Configuration, ExpirationRecord, ReminderDecision


REMINDER_SUBJECT = "REMINDER SSL certificate expiration"
SOON_HEADER = "Certificates of following hosts expire soon:"
OTHERS_HEADER = "Others have enough time before expiration:"


def format_expiration(expiration: datetime) -> str:
    """过期时间的邮件显示格式"""
    return expiration.strftime('%Y-%m-%d %H:%M:%S %Z').strip()


class ReminderFormatter:
    """
    根据过期时间快照判断是否需要提醒，并生成邮件正文

    证书过期时间早于 now + threshold_days 时触发提醒。
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def threshold_instant(self, now: datetime, threshold_days: int) -> datetime:
        """
        计算提醒阈值时间

        按日历天数相加，带时区的时间保持本地时钟时间不变。
        不带时区的 now 按UTC处理。

        Args:
            now: 当前时间
            threshold_days: 提前提醒天数

        Returns:
            datetime: 阈值时间
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now + timedelta(days=threshold_days)

    def should_remind(self, threshold: datetime, snapshot: Dict[str, datetime]) -> bool:
        """任一证书在阈值之前过期即需要提醒"""
        return any(expiration < threshold for expiration in snapshot.values())

    def partition(self, threshold: datetime,
                  snapshot: Dict[str, datetime]) -> Tuple[List[ExpirationRecord], List[ExpirationRecord]]:
        """
        按阈值划分主机，各组按主机名排序

        Args:
            threshold: 阈值时间
            snapshot: 主机 -> 过期时间

        Returns:
            Tuple: (即将过期, 其他)
        """
        soon = []
        others = []
        for host in sorted(snapshot):
            record = ExpirationRecord(host=host, expiration=snapshot[host])
            if record.expiration < threshold:
                soon.append(record)
            else:
                others.append(record)
        return soon, others

    def format_body(self, soon: List[ExpirationRecord], others: List[ExpirationRecord]) -> str:
        """
        格式化邮件正文

        Args:
            soon: 即将过期的证书
            others: 其他证书

        Returns:
            str: 邮件正文
        """
        lines = [SOON_HEADER]
        lines.extend(f"{record.host}: {format_expiration(record.expiration)}" for record in soon)

        if others:
            lines.append("")
            lines.append(OTHERS_HEADER)
            lines.extend(f"{record.host}: {format_expiration(record.expiration)}" for record in others)

        return "\n".join(lines) + "\n"

    def decide_and_format(self, config: Configuration, now: datetime,
                          snapshot: Dict[str, datetime]) -> ReminderDecision:
        """
        判断是否需要提醒；需要时生成邮件正文

        Args:
            config: 运行配置
            now: 当前时间
            snapshot: 本次检查得到的 主机 -> 过期时间

        Returns:
            ReminderDecision: 可解包为 (should_remind, body)
        """
        threshold = self.threshold_instant(now, config.threshold_days)

        if not self.should_remind(threshold, snapshot):
            return ReminderDecision(should_remind=False, body="", threshold_instant=threshold)

        soon, others = self.partition(threshold, snapshot)
        for record in soon:
            self.logger.info(f"主机 {record.host} 的证书将在 {config.threshold_days} 天内过期")

        return ReminderDecision(
            should_remind=True,
            body=self.format_body(soon, others),
            threshold_instant=threshold,
            soon=soon,
            others=others
        )
