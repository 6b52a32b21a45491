"""site_spider.crawler: интерфейс к внешнему краулеру (страницы, хуки, TLS-сессии)."""
