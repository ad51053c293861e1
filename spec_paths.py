from posixpath import dirname, basename

from arm_static import (
    SPEC_ROOT,
    RESOURCE_MANAGER_SEGMENT,
    NON_SWAGGER_SEGMENTS,
    NON_SWAGGER_FILENAMES,
)


def service_dir_of(path):
    """
    Directory of the resource provider service a swagger file belongs to.

    specification/contosowidgetmanager/resource-manager/Microsoft.Contoso/preview/2021-10-01-preview/contoso.json
      => specification/contosowidgetmanager/resource-manager/Microsoft.Contoso
    specification/contosowidgetmanager/resource-manager/Microsoft.Contoso/contosoGroup1/preview/2021-10-01-preview/contoso.json
      => specification/contosowidgetmanager/resource-manager/Microsoft.Contoso/contosoGroup1
    """
    return dirname(dirname(dirname(path)))


def is_resource_manager_file(path):
    return RESOURCE_MANAGER_SEGMENT in path


def resource_manager_files(paths):
    return [p for p in paths if is_resource_manager_file(p)]


def is_swagger_file(path):
    if not (path.startswith(SPEC_ROOT) and path.endswith(".json")):
        return False
    if basename(path) in NON_SWAGGER_FILENAMES:
        return False
    for segment in NON_SWAGGER_SEGMENTS:
        if segment in path:
            return False
    return True


def unique_service_dirs(paths):
    # first-seen order
    dirs = []
    for path in paths:
        service_dir = service_dir_of(path)
        if service_dir not in dirs:
            dirs.append(service_dir)
    return dirs
