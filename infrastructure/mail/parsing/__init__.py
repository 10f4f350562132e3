from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser

__all__ = ["MimeEmailParser"]
