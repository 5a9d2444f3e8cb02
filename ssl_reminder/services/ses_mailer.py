"""
SES邮件发送服务
"""
from typing import Sequence
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..interfaces import MailerInterface
from ..models import MailerCredentials


class SESMailer(MailerInterface):
    """通过 AWS SES 发送纯文本邮件"""

    def __init__(self, credentials: MailerCredentials, region_name: str = "us-east-1"):
        """
        初始化SES客户端

        Args:
            credentials: 邮件服务凭证（access key id / secret access key）
            region_name: AWS区域名称
        """
        self.region_name = region_name
        self.logger = logging.getLogger(__name__)
        self.ses_client = boto3.client(
            'ses',
            region_name=region_name,
            aws_access_key_id=credentials.username,
            aws_secret_access_key=credentials.password
        )
        self.logger.info(f"SES客户端初始化成功，区域: {self.region_name}")

    def send(self, to: Sequence[str], from_address: str, subject: str, body: str) -> bool:
        """
        发送邮件，失败时不重试

        Args:
            to: 收件人列表
            from_address: 发件人
            subject: 主题
            body: 纯文本正文

        Returns:
            bool: 发送是否成功
        """
        try:
            response = self.ses_client.send_email(
                Source=from_address,
                Destination={'ToAddresses': list(to)},
                Message={
                    'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                    'Body': {'Text': {'Data': body, 'Charset': 'UTF-8'}}
                }
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            self.logger.error(f"SES发送失败 - {error_code}: {error_message}")
            return False
        except BotoCoreError as e:
            self.logger.error(f"发送邮件时发生错误: {str(e)}")
            return False

        self.logger.info(f"SES邮件发送成功，MessageId: {response.get('MessageId')}")
        return True
