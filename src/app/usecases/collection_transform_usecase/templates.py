"""
Literal templates of the workflow definition schema.

Builders deep-copy these templates and fill in only the HTTP method, the URL,
the display texts and the positional link names, so every endpoint shares the
same workflow graph.
"""

import copy
import re
from typing import Any, Dict

# Base of the numeric field ids of resource static fields; item ``idx`` owns
# ids ``base + idx`` (method) and ``base + idx + 1`` (url)
FIELD_ID_BASE = 539890000001296100

JELLY_TEMPLATE = (
    "<json:object>\n"
    '<json:property name="method" value="${resource.method}" />\n'
    '<json:property name="url" value="${resource.url}" />\n'
    "</json:object>"
)

# start(0) -> transformation(4) -> http request(1) -> return data(2) / return error(3)
WORKFLOW_WIRES = [
    {"tgt": {"terminal": "in", "moduleId": 4}, "src": {"terminal": "out", "moduleId": 0}},
    {"tgt": {"terminal": "in", "moduleId": 2}, "src": {"terminal": "out", "moduleId": 1}},
    {"tgt": {"terminal": "in", "moduleId": 3}, "src": {"terminal": "error", "moduleId": 1}},
    {"tgt": {"terminal": "in", "moduleId": 1}, "src": {"terminal": "out", "moduleId": 4}},
]

WORKFLOW_TREE_INFO = {
    "0": {"children": [4]},
    "1": {"children": [2, 3]},
    "2": {"children": []},
    "3": {"children": []},
    "4": {"children": [1]},
}

START_MODULE = {
    "config": {
        "xtype": "StartContainer",
        "name": "0",
        "position": [300, 50],
        "moduleId": 0,
        "headline": "Start",
        "key": "start_krj2p",
    },
    "value": {},
}

HTTP_REQUEST_MODULE = {
    "config": {
        "xtype": "HttpRequestContainer",
        "name": "4",
        "position": [300, 270],
        "moduleId": 1,
        "headline": "HTTP Request",
        "key": "HttpRequest_p280e",
    },
    "value": {
        "headers": [
            {"paramName": "Content-Type", "paramValue": "application/json"}
        ],
        "allFields": {
            "bodyType": "raw",
            "enableHeaders": "false",
            "convertXmltoJSON": "false",
            "contentType": "application/json",
            "outputVariableName": "HTTPRequest",
        },
        "rawType": "json",
        "requestType": None,
        "urlText": None,
        "bodyParams": [],
        "rawData": "${transformation_4}",
        "params": [],
    },
}

RETURN_MODULE = {
    "config": {
        "xtype": "ReturnContainer",
        "name": "5",
        "position": [300, 380],
        "moduleId": 2,
        "headline": "Return Data",
        "key": "ReturnData_a4ghp",
    },
    "value": {
        "allFields": {
            "returnValue": "${HTTPRequest.body}",
            "returnType": "text",
            "status": "success",
        }
    },
}

ERROR_HANDLER_MODULE = {
    "config": {
        "xtype": "ErrorHandlerContainer",
        "name": "66",
        "position": [651, 380],
        "moduleId": 3,
        "headline": "Return Error",
        "key": "ErrorHandler_u25gf",
    },
    "value": {
        "allFields": {
            "errorMessage": "${HTTPRequest.body}",
            "errorCode": "${HTTPRequest.status}",
        }
    },
}

TRANSFORMER_MODULE = {
    "config": {
        "xtype": "JellyTransformerContainer",
        "name": "9",
        "position": [300, 160],
        "moduleId": 4,
        "headline": "Transformation",
        "key": "Jelly_ps4tf",
    },
    "value": {
        "allFields": {
            "jelly": JELLY_TEMPLATE,
            "editorType": "json",
            "outputVariableName": "transformation_4",
        }
    },
}

RESOURCE_FIELD_TEMPLATE = {
    "inputParams": {
        "helpText": "",
        "isLabelField": False,
        "name": None,
        "isDataTypeField": False,
        "zf_has_lists": False,
        "isIdField": False,
        "isTypeField": False,
        "label": None,
        "fieldType": 0,
        "isMandatory": True,
        "placeHolder": None,
        "fieldId": None,
    },
    "type": 0,
    "category": 1,
}

ACTION_STATIC_FIELDS_MAPPING = [
    {
        "orderNo": 1,
        "isOutputField": True,
        "defaultValue": "",
        "enable": False,
        "isInputField": True,
        "label": "Method",
        "fieldType": 0,
        "linkName": "method",
        "isMandatory": True,
        "isHidden": False,
    },
    {
        "orderNo": 2,
        "isOutputField": True,
        "defaultValue": "",
        "enable": False,
        "isInputField": True,
        "label": "URL",
        "fieldType": 0,
        "linkName": "url",
        "isMandatory": True,
        "isHidden": False,
    },
]

TRIGGER_CONFIG_TEMPLATE = {
    "triggerScheduleType": 1,
    "is_custom_polling_key": False,
    "dateFormat": "DD-MMM-YYYY HH:mm:ss",
    "poll_order": 0,
    "polling_field_type": 0,
    "extraParams": [],
    "api": None,
    "config": {},
    "is_random_uuid_field": False,
    "poll_by": "0",
    "has_secondary_polling_key": False,
}

SERVICE_TEMPLATE = {
    "serviceType": "regular",
    "isDeprecated": "false",
    "versionTags": "[1]",
    "code": 100,
    "authenticationParam": {},
    "displayName": None,
    "liveVersionTag": "1",
    "tokenRefreshDetails": {},
    "description": None,
    "webhookVerifyApiLinkName": "",
    "version": "20250317.120000",
    "linkName": None,
    "categoryType": 0,
    "isDefaultUtility": "false",
    "categoryNames": [],
    "authenticationScheme": -1,
    "logo": "",
    "serviceId": "539890000001296113",
    "teamMail": "",
    "testApiLinkName": "",
    "infraType": 1,
}


def endpoint_link(i: int) -> str:
    return f"endpoint_{i}"


def resource_link(i: int) -> str:
    return f"resource_{i}"


def trigger_link(i: int) -> str:
    return f"trigger_{i}"


def action_link(i: int) -> str:
    return f"action_{i}"


def service_link_name(display_name: str) -> str:
    return re.sub(r"\s+", "_", display_name.lower())


def build_workflow_config(method: str, url: str) -> Dict[str, Any]:
    http_request = copy.deepcopy(HTTP_REQUEST_MODULE)
    http_request["value"]["requestType"] = method.upper()
    http_request["value"]["urlText"] = url

    return {
        "zoomLevel": 1,
        "name": "workflow",
        "working": {
            "wires": copy.deepcopy(WORKFLOW_WIRES),
            "treeInfo": copy.deepcopy(WORKFLOW_TREE_INFO),
            "orphans": {"wires": [], "modules": []},
            "modules": [
                copy.deepcopy(START_MODULE),
                http_request,
                copy.deepcopy(RETURN_MODULE),
                copy.deepcopy(ERROR_HANDLER_MODULE),
                copy.deepcopy(TRANSFORMER_MODULE),
            ],
        },
        "isHttpConfigModified": True,
        "language": "VisualWorkflow",
    }


def build_endpoint(
    i: int, display_name: str, description: str, method: str, url: str
) -> Dict[str, Any]:
    return {
        "isDataHandler": "FALSE",
        "endpointConfig": [],
        "mappedscopes": [],
        "displayName": display_name,
        "supportPaging": "FALSE",
        "workflowConfig": build_workflow_config(method, url),
        "description": description,
        "disabled": "FALSE",
        "type": 0,
        "linkName": endpoint_link(i),
    }


def _resource_field(name: str, label: str, placeholder: str, field_id: int):
    field = copy.deepcopy(RESOURCE_FIELD_TEMPLATE)
    field["inputParams"].update(
        {
            "name": name,
            "label": label,
            "placeHolder": placeholder,
            "fieldId": field_id,
        }
    )
    return field


def build_resource(
    i: int, idx: int, display_name: str, description: str, method: str, url: str
) -> Dict[str, Any]:
    return {
        "staticFields": [
            _resource_field("method", "Method", method, FIELD_ID_BASE + idx),
            _resource_field("url", "URL", url, FIELD_ID_BASE + idx + 1),
        ],
        "displayName": display_name,
        "description": description,
        "linkName": resource_link(i),
    }


def build_trigger(i: int, display_name: str, description: str) -> Dict[str, Any]:
    trigger_config = copy.deepcopy(TRIGGER_CONFIG_TEMPLATE)
    trigger_config["api"] = endpoint_link(i)

    return {
        "isDeprecated": "FALSE",
        "notes": "",
        "triggerStaticFieldsMapping": [],
        "triggerConfig": trigger_config,
        "displayName": display_name,
        "description": description,
        "resourceName": resource_link(i),
        "type": 0,
        "linkName": trigger_link(i),
        "isDataTypeEnabled": "TRUE",
        "triggerSubResFieldMapping": {},
        "triggerStaticFields": [],
        "documentLink": "",
        "disabled": "FALSE",
    }


def build_action(i: int, display_name: str, description: str) -> Dict[str, Any]:
    return {
        "isDeprecated": "FALSE",
        "notes": "",
        "displayName": display_name,
        "actionStaticFieldsMapping": copy.deepcopy(ACTION_STATIC_FIELDS_MAPPING),
        "description": description,
        "resourceName": resource_link(i),
        "type": 0,
        "linkName": action_link(i),
        "isDataTypeEnabled": "TRUE",
        "actionSubResFieldMapping": {},
        "actionConfig": {
            "extraParams": [],
            "api": endpoint_link(i),
            "config": {},
        },
        "documentLink": "",
        "actionStaticFields": [],
        "disabled": "FALSE",
        "isAllowDynamicField": "FALSE",
    }


def build_service(display_name: str, description: str) -> Dict[str, Any]:
    service = copy.deepcopy(SERVICE_TEMPLATE)
    service["displayName"] = display_name
    service["description"] = description
    service["linkName"] = service_link_name(display_name)
    return service
