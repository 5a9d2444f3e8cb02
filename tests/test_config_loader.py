"""
配置加载器测试
"""
import pytest
import os
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from ssl_reminder.models import Configuration
from ssl_reminder.services.config_loader import ConfigLoader
from ssl_reminder.services.error_handler import ConfigurationError


class TestConfigLoader:
    """配置加载器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.env = {
            'HOSTS': 'example.com,test.org',
            'EMAILS': 'ops@example.com,dev@example.com',
            'MAIL_USERNAME': 'AKIAEXAMPLE',
            'MAIL_PASSWORD': 'secret-key'
        }

    def test_load_defaults(self):
        """测试默认值"""
        config = ConfigLoader(self.env).load()

        assert config.hosts == ('example.com', 'test.org')
        assert config.emails == ('ops@example.com', 'dev@example.com')
        assert config.threshold_days == 30
        assert config.from_address == 'ops@example.com'
        assert config.timeout == 10
        assert config.port == 443
        assert config.max_workers == 1
        assert config.region_name == 'us-east-1'

    def test_load_optional_values(self):
        """测试可选配置"""
        self.env.update({
            'THRESHOLD_DAYS': '14',
            'FROM': 'noreply@example.com',
            'TLS_TIMEOUT': '3',
            'MAX_WORKERS': '8',
            'AWS_REGION': 'eu-west-1'
        })

        config = ConfigLoader(self.env).load()

        assert config.threshold_days == 14
        assert config.from_address == 'noreply@example.com'
        assert config.timeout == 3
        assert config.max_workers == 8
        assert config.region_name == 'eu-west-1'

    def test_whitespace_and_empty_items(self):
        """测试去除空白和空项"""
        self.env['HOSTS'] = ' example.com , ,test.org,'

        config = ConfigLoader(self.env).load()

        assert config.hosts == ('example.com', 'test.org')

    @pytest.mark.parametrize('key', ['HOSTS', 'EMAILS'])
    def test_missing_mandatory(self, key):
        """测试缺少必需配置"""
        del self.env[key]

        with pytest.raises(ConfigurationError, match=key):
            ConfigLoader(self.env).load()

    @pytest.mark.parametrize('value', ['', '   ', ' , ,'])
    def test_empty_recipient_list(self, value):
        """测试空的收件人列表"""
        self.env['EMAILS'] = value

        with pytest.raises(ConfigurationError, match='EMAILS'):
            ConfigLoader(self.env).load()

    @pytest.mark.parametrize('key', ['MAIL_USERNAME', 'MAIL_PASSWORD'])
    def test_missing_credentials(self, key):
        """测试缺少邮件服务凭证"""
        del self.env[key]

        with pytest.raises(ConfigurationError, match=key):
            ConfigLoader(self.env).load_credentials()

    def test_load_credentials(self):
        """测试读取凭证，repr中不显示密码"""
        credentials = ConfigLoader(self.env).load_credentials()

        assert credentials.username == 'AKIAEXAMPLE'
        assert credentials.password == 'secret-key'
        assert 'secret-key' not in repr(credentials)

    @pytest.mark.parametrize('value', ['abc', '1.5'])
    def test_invalid_threshold(self, value):
        """测试无效的阈值天数"""
        self.env['THRESHOLD_DAYS'] = value

        with pytest.raises(ConfigurationError, match='THRESHOLD_DAYS'):
            ConfigLoader(self.env).load()

    def test_negative_threshold(self):
        """测试负数阈值"""
        self.env['THRESHOLD_DAYS'] = '-1'

        with pytest.raises(ConfigurationError):
            ConfigLoader(self.env).load()

    @pytest.mark.parametrize('value', ['0', '-5'])
    def test_non_positive_timeout(self, value):
        """测试超时时间必须大于0"""
        self.env['TLS_TIMEOUT'] = value

        with pytest.raises(ConfigurationError, match='TLS_TIMEOUT'):
            ConfigLoader(self.env).load()

    def test_optional_values_are_stripped(self):
        """测试可选配置去除首尾空白"""
        self.env.update({'FROM': '  noreply@example.com ', 'AWS_REGION': ' eu-west-1 '})

        config = ConfigLoader(self.env).load()

        assert config.from_address == 'noreply@example.com'
        assert config.region_name == 'eu-west-1'

    @patch.dict(os.environ, {
        'HOSTS': 'env.example.com',
        'EMAILS': 'env@example.com',
        'MAIL_USERNAME': 'user',
        'MAIL_PASSWORD': 'pass'
    }, clear=True)
    def test_load_from_os_environ(self):
        """测试默认从 os.environ 读取"""
        config = ConfigLoader().load()

        assert config.hosts == ('env.example.com',)
        assert config.from_address == 'env@example.com'

    def test_describe(self):
        """测试配置摘要"""
        loader = ConfigLoader(self.env)

        summary = loader.describe(loader.load(), loader.load_credentials())

        assert summary['hosts'] == 'example.com, test.org'
        assert summary['from'] == 'ops@example.com'
        assert summary['mail_password'] == 'secret-key'


class TestConfiguration:
    """配置模型测试类"""

    def test_default_from_is_first_recipient(self):
        """测试默认发件人为第一个收件人"""
        config = Configuration(hosts=('a.com',), emails=('first@example.com', 'second@example.com'))

        assert config.from_address == 'first@example.com'

    def test_configuration_is_immutable(self):
        """测试配置不可修改"""
        config = Configuration(hosts=('a.com',), emails=('ops@example.com',))

        with pytest.raises(FrozenInstanceError):
            config.threshold_days = 1
