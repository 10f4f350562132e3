"""邮件领域模块

该模块包含远程邮件收取的领域模型，包括：
- ParsedEmail、MailReaderRequest 等值对象
- ImapSession / Pop3Session 会话接口
- 收取通知事件
"""
