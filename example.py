from confguard import (
    ConfigValidator,
    array_of,
    boolean,
    compose,
    conditional,
    create_schema,
    custom,
    enum,
    get_schema,
    list_schemas,
    number,
    string,
)


# Describe the configuration you accept. Customize for each feature module.
gallery_schema = create_schema(
    {
        "containerId": string(required=True, pattern=r"^[a-z][a-z0-9-]*$"),
        "columns": number(min=1, max=6, default=3),
        "autoplay": boolean(default=False),
        "autoplayDelay": conditional(
            lambda config: config.get("autoplay") is True,
            compose(number(min=500), custom(lambda value, context: value % 100 == 0)),
            default=3000,
        ),
        "transition": enum("fade", "slide", default="fade"),
        "captions": array_of(string(max_length=80)),
    },
    name="gallery",
)

validator = ConfigValidator()

report = validator.validate(
    {"containerId": "Gallery", "columns": 8, "autoplay": True, "autoplayDelay": 250},
    gallery_schema,
    strict=True,
)
print(report.to_summary())
print(report.config)

# Built-in schemas for the storefront modules
print("Available schemas:", list_schemas())
print(validator.validate({"scrollOffset": 900}, get_schema("navigation")).messages())
