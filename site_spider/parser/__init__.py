"""site_spider.parser: разбор HTML и лёгкий лексер JavaScript."""
