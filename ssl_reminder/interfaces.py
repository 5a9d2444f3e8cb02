"""
服务接口定义
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence


class CertificateInspectorInterface(ABC):
    """证书检查器接口"""
    
    @abstractmethod
    def inspect(self, host: str) -> datetime:
        """获取主机叶子证书的过期时间"""
        pass


class MailerInterface(ABC):
    """邮件发送接口"""
    
    @abstractmethod
    def send(self, to: Sequence[str], from_address: str, subject: str, body: str) -> bool:
        """发送邮件，返回是否成功"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""
    
    @abstractmethod
    def log_check_start(self, host_count: int):
        """记录检查开始"""
        pass
    
    @abstractmethod
    def log_expiration(self, host: str, expiration: datetime):
        """记录证书过期时间"""
        pass
    
    @abstractmethod
    def log_error(self, host: str, error: Exception):
        """记录错误信息"""
        pass
