"""Cognito utilities for authentication."""

import boto3
from typing import Dict, Any
from botocore.exceptions import ClientError
import logging

from shared import config
from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExpenseTrackerException,
    ValidationError
)

logger = logging.getLogger(__name__)


def _tokens(auth_result: Dict[str, Any]) -> Dict[str, Any]:
    tokens = {
        'access_token': auth_result['AccessToken'],
        'id_token': auth_result['IdToken'],
        'expires_in': auth_result['ExpiresIn'],
        'token_type': auth_result['TokenType']
    }
    # Not returned by REFRESH_TOKEN_AUTH
    if auth_result.get('RefreshToken'):
        tokens['refresh_token'] = auth_result['RefreshToken']
    return tokens


class CognitoClient:
    """AWS Cognito client wrapper."""

    def __init__(self):
        """Initialize Cognito client."""
        self.client_id = config.COGNITO_CLIENT_ID
        self.user_pool_id = config.COGNITO_USER_POOL_ID

        # Support for LocalStack
        if config.USE_LOCALSTACK and config.LOCALSTACK_ENDPOINT:
            self.client = boto3.client('cognito-idp', endpoint_url=config.LOCALSTACK_ENDPOINT)
        else:
            self.client = boto3.client('cognito-idp')

    def sign_up(self, email: str, password: str, name: str) -> Dict[str, Any]:
        """
        Register a new user.

        Args:
            email: User email
            password: User password
            name: User name

        Returns:
            Registration response

        Raises:
            ConflictError: If the user already exists
            ValidationError: If Cognito rejects the password or attributes
        """
        try:
            response = self.client.sign_up(
                ClientId=self.client_id,
                Username=email,
                Password=password,
                UserAttributes=[
                    {'Name': 'email', 'Value': email},
                    {'Name': 'name', 'Value': name}
                ]
            )

            logger.info(f"User registered successfully: {email}")
            return {
                'user_sub': response['UserSub'],
                'user_confirmed': response['UserConfirmed']
            }
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Sign up failed: {error_code}")

            if error_code == 'UsernameExistsException':
                raise ConflictError("User already exists")
            elif error_code == 'InvalidPasswordException':
                raise ValidationError("Password does not meet requirements")
            elif error_code == 'InvalidParameterException':
                raise ValidationError("Invalid parameters provided")
            else:
                raise ExpenseTrackerException(
                    f"Registration failed: {e.response['Error']['Message']}"
                )

    def admin_confirm_sign_up(self, email: str) -> None:
        """
        Confirm a registration without a verification code.

        Raises:
            ExpenseTrackerException: If confirmation fails
        """
        try:
            self.client.admin_confirm_sign_up(
                UserPoolId=self.user_pool_id,
                Username=email
            )
            logger.info(f"User confirmed successfully: {email}")
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Confirmation failed: {error_code}")
            raise ExpenseTrackerException(
                f"Confirmation failed: {e.response['Error']['Message']}"
            )

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in a user.

        Args:
            email: User email
            password: User password

        Returns:
            Authentication tokens

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        try:
            response = self.client.initiate_auth(
                ClientId=self.client_id,
                AuthFlow='USER_PASSWORD_AUTH',
                AuthParameters={
                    'USERNAME': email,
                    'PASSWORD': password
                }
            )

            logger.info(f"User signed in successfully: {email}")
            return _tokens(response['AuthenticationResult'])
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Sign in failed: {error_code}")

            if error_code in ('NotAuthorizedException', 'UserNotFoundException'):
                raise AuthenticationError("Invalid email or password")
            elif error_code == 'UserNotConfirmedException':
                raise AuthenticationError("User not confirmed")
            else:
                raise AuthenticationError(f"Sign in failed: {e.response['Error']['Message']}")

    def refresh_token(self, refresh_token: str) -> Dict[str, Any]:
        """
        Refresh authentication tokens.

        Args:
            refresh_token: Refresh token

        Returns:
            New authentication tokens

        Raises:
            AuthenticationError: If the refresh token is rejected
        """
        try:
            response = self.client.initiate_auth(
                ClientId=self.client_id,
                AuthFlow='REFRESH_TOKEN_AUTH',
                AuthParameters={
                    'REFRESH_TOKEN': refresh_token
                }
            )

            logger.info("Token refreshed successfully")
            return _tokens(response['AuthenticationResult'])
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Token refresh failed: {error_code}")
            raise AuthenticationError(f"Token refresh failed: {e.response['Error']['Message']}")

    def get_user(self, access_token: str) -> Dict[str, Any]:
        """
        Get user information from access token.

        Args:
            access_token: Access token

        Returns:
            User information

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            response = self.client.get_user(AccessToken=access_token)

            user_attributes = {attr['Name']: attr['Value'] for attr in response['UserAttributes']}

            return {
                'username': response['Username'],
                'email': user_attributes.get('email'),
                'name': user_attributes.get('name'),
                'user_sub': user_attributes.get('sub')
            }
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Get user failed: {error_code}")
            raise AuthenticationError("Invalid or expired token")
