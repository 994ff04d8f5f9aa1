from inkwell.dependencies.dependencies import BlogStoreDep, get_blog_store

__all__ = ["BlogStoreDep", "get_blog_store"]
